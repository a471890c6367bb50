"""Domain error taxonomy for talent syncing."""

from __future__ import annotations

from enum import StrEnum


class TalentSyncError(RuntimeError):
    """Base class for every error raised by the talent sync domain."""


class LuaSyntaxError(TalentSyncError):
    """Raised when saved-variables text cannot be parsed as Lua table literals."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(f"line {line}: {message}" if line is not None else message)
        self.line = line


class UnknownClassError(TalentSyncError):
    """Raised when a configured class name is not in the catalogue."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"Invalid class: {class_name}")
        self.class_name = class_name


class UnknownSpecializationError(TalentSyncError):
    """Raised when a specialization name does not belong to the class."""

    def __init__(self, spec: str, class_name: str) -> None:
        super().__init__(f"Invalid spec {spec} for class {class_name}")
        self.spec = spec
        self.class_name = class_name


class UnknownDifficultyError(TalentSyncError):
    """Raised when a raid difficulty name is not normal, heroic or mythic."""

    def __init__(self, difficulty: str) -> None:
        super().__init__(f"Invalid difficulty: {difficulty}")
        self.difficulty = difficulty


class BuildSourceError(TalentSyncError):
    """Raised by build sources on transport failures (not on missing builds)."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class SyncStage(StrEnum):
    LOAD = "load"
    RESOLVE = "resolve"
    FETCH = "fetch"
    PERSIST = "persist"


class SyncError(TalentSyncError):
    """A sync run aborted; the saved-variables file was left untouched."""

    def __init__(self, stage: SyncStage, message: str) -> None:
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage
