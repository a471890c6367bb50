"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from talentsync.adapters.archon import ArchonBuildSource
from talentsync.adapters.saved_variables import SavedVariablesRepository
from talentsync.adapters.warcraftlogs import WarcraftLogsDiscovery
from talentsync.config.archon import get_archon_config
from talentsync.domain.catalogue import ArchonUrlBuilder
from talentsync.domain.reconciliation import SyncSummary, sync_talent_loadouts

if TYPE_CHECKING:
    from talentsync.config.sync import SyncConfig
    from talentsync.domain.ports import (
        BuildSource,
        ContentDiscovery,
        DiscoveredContent,
        TalentStoreRepository,
    )
    from talentsync.domain.time_windows import Clock

log = getLogger(__name__)


def sync_talent_loadouts_from_config(
    config: SyncConfig,
    *,
    build_source: BuildSource | None = None,
    repository: TalentStoreRepository | None = None,
    clock: Clock | None = None,
) -> SyncSummary:
    """Run one talent sync with the Archon source and the configured output file."""

    effective_repository = repository or SavedVariablesRepository(config.output_path)
    log.info(
        "Starting talent sync: characters=%s, bosses=%s, difficulties=%s, dungeons=%s, "
        "clear_previous=%s",
        len(config.characters),
        len(config.raid_bosses),
        len(config.raid_difficulties),
        len(config.dungeons),
        config.clear_previous_builds,
    )
    return asyncio.run(
        _sync_talents_async(
            config,
            build_source=build_source,
            repository=effective_repository,
            clock=clock,
        )
    )


async def _sync_talents_async(
    config: SyncConfig,
    *,
    build_source: BuildSource | None,
    repository: TalentStoreRepository,
    clock: Clock | None,
) -> SyncSummary:
    if build_source is not None:
        return await sync_talent_loadouts(
            config,
            build_source=build_source,
            repository=repository,
            clock=clock,
        )

    archon_config = get_archon_config()
    async with ArchonBuildSource(config=archon_config) as source:
        return await sync_talent_loadouts(
            config,
            build_source=source,
            repository=repository,
            url_builder=ArchonUrlBuilder(archon_config.base_url),
            clock=clock,
        )


def discover_content(*, discovery: ContentDiscovery | None = None) -> DiscoveredContent:
    """Fetch the current raid bosses and dungeons."""

    active = discovery or WarcraftLogsDiscovery()
    return asyncio.run(active.discover())
