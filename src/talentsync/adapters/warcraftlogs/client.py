"""Discover current raid bosses and Mythic+ dungeons from Warcraft Logs."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from talentsync.adapters.http_resilience import ResilientClient
from talentsync.config.warcraftlogs import WarcraftLogsConfig, get_warcraftlogs_config
from talentsync.domain.ports import DiscoveredContent

from .schema import SidebarExpansion, ZoneSidebarResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from talentsync.config.http_resilience import ResilienceConfig
    from talentsync.domain.ports import ContentDiscovery

log = getLogger(__name__)

RAID_SECTION_ID: Final[str] = "raid-content"
DUNGEON_SECTION_ID: Final[str] = "dungeons-content"
_SLUG_STRIP: Final[re.Pattern[str]] = re.compile(r"[',:\"().!&]")


class WarcraftLogsAPIError(RuntimeError):
    """Raised when the zone sidebar cannot be fetched or understood."""


def to_slug(name: str) -> str:
    """Turn a display name into the URL slug Archon uses (``Queen Ansurek`` -> ``queen-ansurek``)."""

    return _SLUG_STRIP.sub("", name).strip().lower().replace(" ", "-").replace("--", "-")


class WarcraftLogsDiscovery:
    def __init__(
        self,
        *,
        config: WarcraftLogsConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_warcraftlogs_config()
        self._client_factory = client_factory or ResilientClient

    async def discover(self) -> DiscoveredContent:
        async with self._client_factory(self._config.resilience) as client:
            try:
                response = await client.get(self._config.zone_sidebar_url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise WarcraftLogsAPIError(f"Failed to fetch from Warcraft Logs: {exc}") from exc

        try:
            sidebar = ZoneSidebarResponse.model_validate({"entries": response.json()})
        except (ValueError, ValidationError) as exc:
            raise WarcraftLogsAPIError(f"Failed to parse Warcraft Logs response: {exc}") from exc

        content = parse_sidebar(sidebar)
        log.info(
            "Discovered %s raid bosses and %s dungeons",
            len(content.raid_bosses),
            len(content.dungeons),
        )
        return content


def parse_sidebar(sidebar: ZoneSidebarResponse) -> DiscoveredContent:
    """Pick bosses of the current raid tier and dungeons of the current season.

    The first expansion listed is the current one; for dungeons its first panel
    section is the current season.
    """

    content = DiscoveredContent()

    raid_expansion = _current_expansion(sidebar, RAID_SECTION_ID)
    if raid_expansion is not None and raid_expansion.panel is not None:
        for section in raid_expansion.panel.sections:
            if section.header is None or section.header.content_type_name != "zones":
                continue
            content.raid_bosses.extend(
                to_slug(child.title)
                for child in section.children
                if child.child_type == "boss" and child.title
            )

    dungeon_expansion = _current_expansion(sidebar, DUNGEON_SECTION_ID)
    if dungeon_expansion is not None and dungeon_expansion.panel is not None:
        sections = dungeon_expansion.panel.sections
        if sections:
            content.dungeons.extend(
                to_slug(child.title)
                for child in sections[0].children
                if child.child_type == "boss" and child.title
            )

    return content


def _current_expansion(sidebar: ZoneSidebarResponse, entry_id: str) -> SidebarExpansion | None:
    entry = sidebar.find(entry_id)
    if entry is None or not entry.expansions:
        return None
    return entry.expansions[0]


if TYPE_CHECKING:
    _discovery_check: ContentDiscovery = WarcraftLogsDiscovery()
