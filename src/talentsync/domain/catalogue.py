"""Static class/specialization catalogue and Archon URL construction."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from .errors import UnknownClassError, UnknownSpecializationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .identifiers import RaidDifficulty
    from .time_windows import ContentWindow


class WowClass(StrEnum):
    """Playable classes keyed by their PascalCase configuration name."""

    WARRIOR = "Warrior"
    PALADIN = "Paladin"
    HUNTER = "Hunter"
    ROGUE = "Rogue"
    PRIEST = "Priest"
    DEATH_KNIGHT = "DeathKnight"
    SHAMAN = "Shaman"
    MAGE = "Mage"
    WARLOCK = "Warlock"
    MONK = "Monk"
    DRUID = "Druid"
    DEMON_HUNTER = "DemonHunter"
    EVOKER = "Evoker"

    @classmethod
    def from_name(cls, name: str) -> WowClass | None:
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def parse(cls, name: str) -> WowClass:
        wow_class = cls.from_name(name)
        if wow_class is None:
            raise UnknownClassError(name)
        return wow_class

    @property
    def lua_key(self) -> str:
        """Uppercase key used by the saved-variables table (e.g. ``DEATHKNIGHT``)."""

        return self.value.upper()

    @property
    def url_slug(self) -> str:
        """Hyphenated lowercase form used in Archon URLs (e.g. ``death-knight``)."""

        return _URL_SLUGS.get(self, self.value.lower())

    @property
    def specializations(self) -> Mapping[str, int]:
        return _SPEC_INDICES[self]

    def spec_index(self, spec: str) -> int | None:
        return _SPEC_INDICES[self].get(spec)

    def resolve_spec_index(self, spec: str) -> int:
        index = self.spec_index(spec)
        if index is None:
            raise UnknownSpecializationError(spec, self.value)
        return index


_URL_SLUGS: Final[Mapping[WowClass, str]] = MappingProxyType(
    {
        WowClass.DEATH_KNIGHT: "death-knight",
        WowClass.DEMON_HUNTER: "demon-hunter",
    }
)


def _specs(*names: str) -> Mapping[str, int]:
    return MappingProxyType({name: index for index, name in enumerate(names, start=1)})


# Indices follow the in-game specialization order; counts differ per class.
_SPEC_INDICES: Final[Mapping[WowClass, Mapping[str, int]]] = MappingProxyType(
    {
        WowClass.WARRIOR: _specs("arms", "fury", "protection"),
        WowClass.PALADIN: _specs("holy", "protection", "retribution"),
        WowClass.HUNTER: _specs("beast-mastery", "marksmanship", "survival"),
        WowClass.ROGUE: _specs("assassination", "outlaw", "subtlety"),
        WowClass.PRIEST: _specs("discipline", "holy", "shadow"),
        WowClass.DEATH_KNIGHT: _specs("blood", "frost", "unholy"),
        WowClass.SHAMAN: _specs("elemental", "enhancement", "restoration"),
        WowClass.MAGE: _specs("arcane", "fire", "frost"),
        WowClass.WARLOCK: _specs("affliction", "demonology", "destruction"),
        WowClass.MONK: _specs("brewmaster", "mistweaver", "windwalker"),
        WowClass.DRUID: _specs("balance", "feral", "guardian", "restoration"),
        WowClass.DEMON_HUNTER: _specs("havoc", "vengeance"),
        WowClass.EVOKER: _specs("devastation", "preservation", "augmentation"),
    }
)


class ArchonUrlBuilder:
    """Builds Archon build-page URLs.

    Raid: ``{base}/{spec}/{class}/raid/overview/{difficulty}/{boss}``
    Mythic+: ``{base}/{spec}/{class}/mythic-plus/overview/10//{dungeon}/{window}``
    (the empty segment sits where raids carry the difficulty).
    """

    def __init__(self, base_url: str = "https://www.archon.gg/wow/builds") -> None:
        self.base_url = base_url.rstrip("/")

    def raid_url(
        self,
        wow_class: WowClass,
        spec: str,
        difficulty: RaidDifficulty,
        boss: str,
    ) -> str:
        return (
            f"{self.base_url}/{spec.lower()}/{wow_class.url_slug}"
            f"/raid/overview/{difficulty}/{boss.lower()}"
        )

    def dungeon_url(
        self,
        wow_class: WowClass,
        spec: str,
        dungeon: str,
        window: ContentWindow,
    ) -> str:
        return (
            f"{self.base_url}/{spec.lower()}/{wow_class.url_slug}"
            f"/mythic-plus/overview/10//{dungeon.lower()}/{window}"
        )
