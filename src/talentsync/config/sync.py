"""Sync run configuration: which characters, specs and content to refresh."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigurationError, MissingConfigurationError

EXAMPLE_OUTPUT_PATH = Path(
    "/Applications/World of Warcraft/_retail_/WTF/Account/YOUR_ACCOUNT_ID/"
    "SavedVariables/TalentLoadoutsEx.lua"
)


class SyncConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class Character(SyncConfigModel):
    """One character to refresh; ``name`` is only used for logging."""

    name: str
    class_name: str = Field(alias="class")
    specializations: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_character(self) -> Self:
        if not self.class_name.strip():
            raise ValueError(f"Character '{self.name}' has no class specified")
        if not self.specializations:
            raise ValueError(f"Character '{self.name}' has no specializations specified")
        return self


class SyncConfig(SyncConfigModel):
    """Pre-validated input of one talent sync run.

    When ``clear_previous_builds`` is false only the slots being refreshed lose their
    generated builds; when true every generated build in the file is dropped first.
    """

    characters: tuple[Character, ...]
    raid_difficulties: tuple[str, ...] = ()
    raid_bosses: tuple[str, ...] = ()
    dungeons: tuple[str, ...] = ()
    clear_previous_builds: bool = False
    output_path: Path

    @model_validator(mode="after")
    def _check_targets(self) -> Self:
        if not self.characters:
            raise ValueError("Configuration must include at least one character")
        if not (self.raid_difficulties or self.raid_bosses or self.dungeons):
            raise ValueError(
                "Configuration must include at least one of: raid difficulties/bosses or dungeons"
            )
        return self

    @property
    def wants_raids(self) -> bool:
        return bool(self.raid_bosses) and bool(self.raid_difficulties)

    @property
    def wants_dungeons(self) -> bool:
        return bool(self.dungeons)


def parse_sync_config(raw: str | bytes) -> SyncConfig:
    try:
        return SyncConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid sync configuration: {exc}") from exc


def load_sync_config(path: Path) -> SyncConfig:
    """Read and validate a JSON sync configuration file."""

    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise MissingConfigurationError(f"Sync configuration not found: {path}") from exc
    return parse_sync_config(raw)


def example_sync_config() -> SyncConfig:
    return SyncConfig(
        characters=(
            Character(name="MyWarrior", class_name="Warrior", specializations=("arms", "fury")),
            Character(name="MyMage", class_name="Mage", specializations=("frost", "fire")),
        ),
        raid_difficulties=("heroic", "normal"),
        raid_bosses=("broodtwister", "sikran", "queen-ansurek"),
        dungeons=("ara-kara", "city-of-threads", "mists-of-tirna-scithe"),
        clear_previous_builds=False,
        output_path=EXAMPLE_OUTPUT_PATH,
    )
