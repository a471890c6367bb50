from __future__ import annotations

import json
from pathlib import Path

import pytest

from talentsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    example_sync_config,
    get_storage_config,
    load_sync_config,
    parse_sync_config,
)

VALID = {
    "characters": [{"name": "Tank", "class": "Warrior", "specializations": ["arms"]}],
    "raidDifficulties": ["heroic"],
    "raidBosses": ["sikran"],
    "dungeons": [],
    "clearPreviousBuilds": True,
    "outputPath": "/tmp/TalentLoadoutsEx.lua",
    "unrelatedSetting": 1,
}


def _with(**changes: object) -> str:
    return json.dumps({**VALID, **changes})


def test_parse_sync_config_reads_camel_case_fields() -> None:
    config = parse_sync_config(json.dumps(VALID))

    (character,) = config.characters
    assert character.class_name == "Warrior"
    assert character.specializations == ("arms",)
    assert config.raid_bosses == ("sikran",)
    assert config.clear_previous_builds is True
    assert config.output_path == Path("/tmp/TalentLoadoutsEx.lua")
    assert config.wants_raids
    assert not config.wants_dungeons


def test_clear_previous_builds_defaults_to_false() -> None:
    raw = dict(VALID)
    del raw["clearPreviousBuilds"]

    assert parse_sync_config(json.dumps(raw)).clear_previous_builds is False


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        (_with(characters=[]), "at least one character"),
        (
            _with(raidDifficulties=[], raidBosses=[], dungeons=[]),
            "raid difficulties/bosses or dungeons",
        ),
        (
            _with(characters=[{"name": "Tank", "class": " ", "specializations": ["arms"]}]),
            "Character 'Tank' has no class specified",
        ),
        (
            _with(characters=[{"name": "Tank", "class": "Warrior", "specializations": []}]),
            "Character 'Tank' has no specializations specified",
        ),
        (_with(outputPath=None), "Invalid sync configuration"),
        ("not json", "Invalid sync configuration"),
    ],
)
def test_parse_sync_config_rejects_invalid_input(raw: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        parse_sync_config(raw)


def test_dungeons_alone_are_enough() -> None:
    config = parse_sync_config(_with(raidDifficulties=[], raidBosses=[], dungeons=["ara-kara"]))

    assert config.wants_dungeons
    assert not config.wants_raids


def test_difficulties_without_bosses_pass_validation_but_skip_raids() -> None:
    config = parse_sync_config(_with(raidBosses=[]))

    assert not config.wants_raids


def test_load_sync_config_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(VALID), encoding="utf-8")

    assert load_sync_config(path).raid_difficulties == ("heroic",)


def test_load_sync_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError, match="not found"):
        load_sync_config(tmp_path / "absent.json")


def test_example_config_round_trips_through_json() -> None:
    example = example_sync_config()

    dumped = example.model_dump_json(by_alias=True)
    payload = json.loads(dumped)

    assert payload["characters"][0]["class"] == "Warrior"
    assert "raidDifficulties" in payload
    assert parse_sync_config(dumped) == example


def test_storage_config_uses_env_override(isolated_data_dir: Path) -> None:
    storage = get_storage_config()

    assert storage.config_path() == isolated_data_dir.resolve() / "config.json"
    assert not isolated_data_dir.exists()
