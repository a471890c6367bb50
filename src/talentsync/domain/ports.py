"""Ports for the collaborators the sync orchestrator talks to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .talent_store import TalentStore


@runtime_checkable
class BuildSource(Protocol):
    """Looks up the talent export string published at a build-page URL."""

    async def fetch_build(self, url: str) -> str | None:
        """Return the build string, or ``None`` when the page has no build.

        Transport failures raise instead of returning ``None``.
        """
        ...


@runtime_checkable
class TalentStoreRepository(Protocol):
    """Persistence for the saved-variables table."""

    def load(self) -> TalentStore | None:
        """Return the stored table, or ``None`` when nothing has been saved yet."""
        ...

    def save(self, store: TalentStore) -> None: ...


@dataclass(slots=True)
class DiscoveredContent:
    """Current raid bosses and dungeons, as URL slugs."""

    raid_bosses: list[str] = field(default_factory=list)
    dungeons: list[str] = field(default_factory=list)


@runtime_checkable
class ContentDiscovery(Protocol):
    async def discover(self) -> DiscoveredContent: ...


__all__ = ["BuildSource", "ContentDiscovery", "DiscoveredContent", "TalentStoreRepository"]
