"""Naming scheme for generated talent loadouts.

Generated loadouts carry ``MACHINE_SUFFIX`` at the end of their name. That suffix
is the only ownership marker: anything without it belongs to the player and is
never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .errors import UnknownDifficultyError

MACHINE_SUFFIX: Final[str] = "_ARCT"


class RaidDifficulty(StrEnum):
    NORMAL = "normal"
    HEROIC = "heroic"
    MYTHIC = "mythic"

    @classmethod
    def parse(cls, value: str) -> RaidDifficulty:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownDifficultyError(value) from None


@dataclass(frozen=True, slots=True)
class RaidIdentifier:
    difficulty: RaidDifficulty
    boss: str

    @property
    def identifier(self) -> str:
        return f"R-{self.difficulty}-{self.boss}"

    @property
    def talent_name(self) -> str:
        return talent_name(self.identifier)


@dataclass(frozen=True, slots=True)
class DungeonIdentifier:
    dungeon: str

    @property
    def identifier(self) -> str:
        return f"M+-{self.dungeon}"

    @property
    def talent_name(self) -> str:
        return talent_name(self.identifier)


TalentIdentifier = RaidIdentifier | DungeonIdentifier


def talent_name(identifier: str) -> str:
    return f"{identifier}{MACHINE_SUFFIX}"


def is_machine_owned(name: str) -> bool:
    return name.endswith(MACHINE_SUFFIX)


__all__ = [
    "MACHINE_SUFFIX",
    "DungeonIdentifier",
    "RaidDifficulty",
    "RaidIdentifier",
    "TalentIdentifier",
    "is_machine_owned",
    "talent_name",
]
