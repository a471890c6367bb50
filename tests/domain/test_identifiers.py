from __future__ import annotations

import pytest

from talentsync.domain.errors import UnknownDifficultyError
from talentsync.domain.identifiers import (
    MACHINE_SUFFIX,
    DungeonIdentifier,
    RaidDifficulty,
    RaidIdentifier,
    is_machine_owned,
    talent_name,
)


def test_raid_identifier_format() -> None:
    identifier = RaidIdentifier(difficulty=RaidDifficulty.HEROIC, boss="sikran")

    assert identifier.identifier == "R-heroic-sikran"
    assert identifier.talent_name == "R-heroic-sikran_ARCT"


def test_dungeon_identifier_format() -> None:
    identifier = DungeonIdentifier(dungeon="ara-kara")

    assert identifier.identifier == "M+-ara-kara"
    assert identifier.talent_name == "M+-ara-kara_ARCT"


def test_talent_name_appends_suffix() -> None:
    assert talent_name("anything") == f"anything{MACHINE_SUFFIX}"
    assert is_machine_owned(talent_name("anything"))


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("R-mythic-queen-ansurek_ARCT", True),
        ("_ARCT", True),
        ("My build", False),
        ("My build_ARCT ", False),
        ("", False),
    ],
)
def test_is_machine_owned(name: str, expected: bool) -> None:
    assert is_machine_owned(name) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("normal", RaidDifficulty.NORMAL),
        ("Heroic", RaidDifficulty.HEROIC),
        (" MYTHIC ", RaidDifficulty.MYTHIC),
    ],
)
def test_raid_difficulty_parse(raw: str, expected: RaidDifficulty) -> None:
    assert RaidDifficulty.parse(raw) is expected


def test_raid_difficulty_parse_rejects_unknown() -> None:
    with pytest.raises(UnknownDifficultyError, match="Invalid difficulty: lfr"):
        RaidDifficulty.parse("lfr")
