"""Talent sync run: refresh generated loadouts, leave the player's own alone."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .catalogue import ArchonUrlBuilder, WowClass
from .errors import (
    BuildSourceError,
    LuaSyntaxError,
    SyncError,
    SyncStage,
    UnknownClassError,
    UnknownDifficultyError,
    UnknownSpecializationError,
)
from .identifiers import DungeonIdentifier, RaidDifficulty, RaidIdentifier
from .talent_store import TalentEntry, TalentStore
from .time_windows import Clock, primary_window

if TYPE_CHECKING:
    from talentsync.config.sync import SyncConfig

    from .identifiers import TalentIdentifier
    from .ports import BuildSource, TalentStoreRepository
    from .time_windows import ContentWindow

log = getLogger(__name__)


@dataclass(slots=True)
class SyncSummary:
    """Outcome of a talent sync run."""

    raid_entries: int = 0
    dungeon_entries: int = 0
    characters_processed: int = 0

    @property
    def total_entries(self) -> int:
        return self.raid_entries + self.dungeon_entries


@dataclass(frozen=True, slots=True)
class SpecTarget:
    """One (character, specialization) slot to refresh."""

    character: str
    wow_class: WowClass
    spec: str
    spec_index: int

    @property
    def class_key(self) -> str:
        return self.wow_class.lua_key


def resolve_targets(config: SyncConfig) -> list[SpecTarget]:
    """Map every configured character/spec pair onto catalogue entries.

    Raises ``UnknownClassError`` / ``UnknownSpecializationError`` on the first
    name the catalogue does not know.
    """

    targets: list[SpecTarget] = []
    for character in config.characters:
        wow_class = WowClass.parse(character.class_name)
        targets.extend(
            SpecTarget(
                character=character.name,
                wow_class=wow_class,
                spec=spec,
                spec_index=wow_class.resolve_spec_index(spec),
            )
            for spec in character.specializations
        )
    return targets


def resolve_difficulties(config: SyncConfig) -> tuple[RaidDifficulty, ...]:
    return tuple(RaidDifficulty.parse(name) for name in config.raid_difficulties)


async def sync_talent_loadouts(
    config: SyncConfig,
    *,
    build_source: BuildSource,
    repository: TalentStoreRepository,
    url_builder: ArchonUrlBuilder | None = None,
    clock: Clock | None = None,
) -> SyncSummary:
    """Refresh generated loadouts for every configured target and save once.

    Any failure raises ``SyncError`` naming the stage, before anything is written.
    Lookups that find no build are skipped silently.
    """

    builder = url_builder or ArchonUrlBuilder()
    summary = SyncSummary()

    store = _load_store(repository)

    if config.clear_previous_builds:
        removed = store.remove_all_machine_owned()
        log.info("Cleared %s previously generated builds", removed)

    try:
        difficulties = resolve_difficulties(config) if config.wants_raids else ()
        targets = resolve_targets(config)
    except (UnknownClassError, UnknownSpecializationError, UnknownDifficultyError) as exc:
        raise SyncError(SyncStage.RESOLVE, str(exc)) from exc

    window = primary_window(clock=clock) if clock is not None else primary_window()

    for target in targets:
        log.info(
            "Processing %s (%s %s, slot %s)",
            target.character,
            target.spec,
            target.wow_class,
            target.spec_index,
        )
        if not config.clear_previous_builds:
            store.remove_machine_owned(target.class_key, target.spec_index)

        if config.wants_raids:
            summary.raid_entries += await _sync_raid_builds(
                store,
                target,
                bosses=config.raid_bosses,
                difficulties=difficulties,
                build_source=build_source,
                url_builder=builder,
            )
        if config.wants_dungeons:
            summary.dungeon_entries += await _sync_dungeon_builds(
                store,
                target,
                dungeons=config.dungeons,
                primary=window,
                build_source=build_source,
                url_builder=builder,
            )

    summary.characters_processed = len(config.characters)

    try:
        repository.save(store)
    except OSError as exc:
        raise SyncError(SyncStage.PERSIST, str(exc)) from exc

    log.info(
        "Talent sync finished: total=%s, raid=%s, mythic_plus=%s, characters=%s",
        summary.total_entries,
        summary.raid_entries,
        summary.dungeon_entries,
        summary.characters_processed,
    )
    return summary


def _load_store(repository: TalentStoreRepository) -> TalentStore:
    try:
        store = repository.load()
    except (LuaSyntaxError, OSError, UnicodeError) as exc:
        raise SyncError(SyncStage.LOAD, str(exc)) from exc
    if store is None:
        log.info("No existing talent file found, starting from an empty table")
        return TalentStore()
    return store


async def _sync_raid_builds(
    store: TalentStore,
    target: SpecTarget,
    *,
    bosses: tuple[str, ...],
    difficulties: tuple[RaidDifficulty, ...],
    build_source: BuildSource,
    url_builder: ArchonUrlBuilder,
) -> int:
    added = 0
    for boss in bosses:
        for difficulty in difficulties:
            identifier = RaidIdentifier(difficulty=difficulty, boss=boss)
            url = url_builder.raid_url(target.wow_class, target.spec, difficulty, boss)
            log.info("Fetching %s from %s", identifier.identifier, url)
            build = await _lookup(build_source, url)
            if build is None:
                log.info("No talent build available for %s", identifier.identifier)
                continue
            _add_generated(store, target, identifier, build)
            added += 1
    return added


async def _sync_dungeon_builds(
    store: TalentStore,
    target: SpecTarget,
    *,
    dungeons: tuple[str, ...],
    primary: ContentWindow,
    build_source: BuildSource,
    url_builder: ArchonUrlBuilder,
) -> int:
    added = 0
    for dungeon in dungeons:
        identifier = DungeonIdentifier(dungeon=dungeon)
        for window in (primary, primary.fallback):
            url = url_builder.dungeon_url(target.wow_class, target.spec, dungeon, window)
            log.info("Fetching %s (%s) from %s", identifier.identifier, window, url)
            build = await _lookup(build_source, url)
            if build is not None:
                _add_generated(store, target, identifier, build)
                added += 1
                break
        else:
            log.info("No talent build available for %s", identifier.identifier)
    return added


async def _lookup(build_source: BuildSource, url: str) -> str | None:
    try:
        return await build_source.fetch_build(url)
    except BuildSourceError as exc:
        raise SyncError(SyncStage.FETCH, str(exc)) from exc


def _add_generated(
    store: TalentStore,
    target: SpecTarget,
    identifier: TalentIdentifier,
    build: str,
) -> None:
    entry = TalentEntry(name=identifier.talent_name, text=build)
    store.add_entry(target.class_key, target.spec_index, entry)


__all__ = [
    "SpecTarget",
    "SyncSummary",
    "resolve_difficulties",
    "resolve_targets",
    "sync_talent_loadouts",
]
