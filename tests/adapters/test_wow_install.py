from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath

import pytest

from talentsync.adapters.wow_install import (
    DiscoveredCharacter,
    candidate_install_paths,
    find_install_path,
    scan_characters,
    talent_loadouts_path,
)


def test_candidate_paths_per_platform() -> None:
    assert candidate_install_paths("darwin") == [
        PurePosixPath("/Applications/World of Warcraft/_retail_")
    ]
    assert candidate_install_paths("win32")[0] == PureWindowsPath(
        r"C:\Program Files (x86)\World of Warcraft\_retail_"
    )
    assert candidate_install_paths("linux", env={"HOME": "/home/pat"}) == [
        PurePosixPath("/home/pat/.wine/drive_c/Program Files (x86)/World of Warcraft/_retail_")
    ]
    assert candidate_install_paths("linux", env={}) == []


def test_find_install_path_returns_first_existing(tmp_path: Path) -> None:
    install = tmp_path / ".wine/drive_c/Program Files (x86)/World of Warcraft/_retail_"
    install.mkdir(parents=True)

    assert find_install_path("linux", env={"HOME": str(tmp_path)}) == install
    assert find_install_path("linux", env={"HOME": str(tmp_path / "nobody")}) is None


def test_find_install_path_uses_exists_hook() -> None:
    found = find_install_path("win32", exists=lambda path: "Program Files (x86)" not in str(path))

    assert found is not None
    assert "Program Files (x86)" not in str(found)


def test_talent_loadouts_path() -> None:
    path = talent_loadouts_path(Path("/wow/_retail_"), "12345#1")

    assert path == Path("/wow/_retail_/WTF/Account/12345#1/SavedVariables/TalentLoadoutsEx.lua")


def test_scan_characters(tmp_path: Path) -> None:
    account = tmp_path / "WTF" / "Account" / "ACCOUNT1"
    (account / "SavedVariables").mkdir(parents=True)
    (account / "Silvermoon" / "Zed").mkdir(parents=True)
    (account / "Silvermoon" / "Anna").mkdir(parents=True)
    (account / "Draenor" / "Bo").mkdir(parents=True)
    (account / "config-cache.wtf").write_text("", encoding="utf-8")

    characters = scan_characters(tmp_path)

    assert characters == [
        DiscoveredCharacter(name="Bo", realm="Draenor", class_name="Unknown", account_id="ACCOUNT1"),
        DiscoveredCharacter(name="Anna", realm="Silvermoon", class_name="Unknown", account_id="ACCOUNT1"),
        DiscoveredCharacter(name="Zed", realm="Silvermoon", class_name="Unknown", account_id="ACCOUNT1"),
    ]


def test_scan_characters_requires_account_dir(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="WTF/Account"):
        scan_characters(tmp_path)
