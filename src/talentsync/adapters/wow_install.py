"""Locate a World of Warcraft installation and the characters it knows about."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TALENT_LOADOUTS_FILENAME: Final[str] = "TalentLoadoutsEx.lua"
SAVED_VARIABLES_DIR: Final[str] = "SavedVariables"
UNKNOWN_CLASS: Final[str] = "Unknown"


@dataclass(frozen=True, slots=True)
class DiscoveredCharacter:
    name: str
    realm: str
    class_name: str
    account_id: str


def candidate_install_paths(
    platform: str | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> list[PurePath]:
    """Return likely ``_retail_`` directories for ``platform``, most likely first.

    Pure: nothing is checked on disk. ``platform`` follows ``sys.platform``.
    """

    platform = platform or sys.platform
    environ = os.environ if env is None else env

    if platform == "darwin":
        return [PurePosixPath("/Applications/World of Warcraft/_retail_")]
    if platform.startswith("win"):
        return [
            PureWindowsPath(r"C:\Program Files (x86)\World of Warcraft\_retail_"),
            PureWindowsPath(r"C:\Program Files\World of Warcraft\_retail_"),
        ]
    home = environ.get("HOME")
    if not home:
        return []
    return [PurePosixPath(home) / ".wine/drive_c/Program Files (x86)/World of Warcraft/_retail_"]


def find_install_path(
    platform: str | None = None,
    *,
    env: Mapping[str, str] | None = None,
    exists: Callable[[Path], bool] = Path.exists,
) -> Path | None:
    for candidate in candidate_install_paths(platform, env=env):
        path = Path(candidate)
        if exists(path):
            return path
    return None


def talent_loadouts_path(install_path: Path, account_id: str) -> Path:
    return (
        install_path
        / "WTF"
        / "Account"
        / account_id
        / SAVED_VARIABLES_DIR
        / TALENT_LOADOUTS_FILENAME
    )


def scan_characters(install_path: Path) -> list[DiscoveredCharacter]:
    """List characters from ``WTF/Account/<account>/<realm>/<character>`` folders.

    The class cannot be read from the folder layout, so every character is
    reported with class ``"Unknown"`` for the user to pick.
    """

    accounts_dir = install_path / "WTF" / "Account"
    if not accounts_dir.is_dir():
        raise FileNotFoundError(f"WTF/Account directory not found at {accounts_dir}")

    characters: list[DiscoveredCharacter] = []
    for account_dir in _subdirectories(accounts_dir):
        for realm_dir in _subdirectories(account_dir):
            characters.extend(
                DiscoveredCharacter(
                    name=character_dir.name,
                    realm=realm_dir.name,
                    class_name=UNKNOWN_CLASS,
                    account_id=account_dir.name,
                )
                for character_dir in _subdirectories(realm_dir)
            )
    return characters


def _subdirectories(path: Path) -> list[Path]:
    try:
        children = sorted(path.iterdir())
    except OSError:
        return []
    return [child for child in children if child.is_dir() and child.name != SAVED_VARIABLES_DIR]
