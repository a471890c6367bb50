"""File-backed repository for ``TalentLoadoutsEx.lua``."""

from __future__ import annotations

import os
import tempfile
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from talentsync.domain.talent_store import TalentStore

if TYPE_CHECKING:
    from talentsync.domain.ports import TalentStoreRepository

log = getLogger(__name__)

# Bytes that are not valid UTF-8 survive a read/write cycle unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class SavedVariablesRepository:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> TalentStore | None:
        if not self.path.exists():
            return None
        log.info("Loading existing talents from %s", self.path)
        text = self.path.read_text(encoding=_ENCODING, errors=_ERRORS)
        return TalentStore.decode(text)

    def save(self, store: TalentStore) -> None:
        """Replace the file in one step so the game never sees a partial table."""

        log.info("Writing talents to %s", self.path)
        write_atomic(self.path, store.encode())


def write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="\n") as handle:
            handle.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


if TYPE_CHECKING:
    _repository_check: TalentStoreRepository = SavedVariablesRepository(Path())
