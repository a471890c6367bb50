"""Talent store, naming scheme and sync policy."""

from __future__ import annotations

from .catalogue import ArchonUrlBuilder, WowClass
from .errors import (
    BuildSourceError,
    LuaSyntaxError,
    SyncError,
    SyncStage,
    TalentSyncError,
    UnknownClassError,
    UnknownDifficultyError,
    UnknownSpecializationError,
)
from .identifiers import (
    MACHINE_SUFFIX,
    DungeonIdentifier,
    RaidDifficulty,
    RaidIdentifier,
    is_machine_owned,
    talent_name,
)
from .reconciliation import SyncSummary, sync_talent_loadouts
from .talent_store import TalentEntry, TalentStore
from .time_windows import ContentWindow, primary_window

__all__ = [
    "MACHINE_SUFFIX",
    "ArchonUrlBuilder",
    "BuildSourceError",
    "ContentWindow",
    "DungeonIdentifier",
    "LuaSyntaxError",
    "RaidDifficulty",
    "RaidIdentifier",
    "SyncError",
    "SyncStage",
    "SyncSummary",
    "TalentEntry",
    "TalentStore",
    "TalentSyncError",
    "UnknownClassError",
    "UnknownDifficultyError",
    "UnknownSpecializationError",
    "WowClass",
    "is_machine_owned",
    "primary_window",
    "sync_talent_loadouts",
    "talent_name",
]
