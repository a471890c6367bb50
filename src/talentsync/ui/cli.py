from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from talentsync.adapters.wow_install import (
    find_install_path,
    scan_characters,
    talent_loadouts_path,
)
from talentsync.app import discover_content, sync_talent_loadouts_from_config
from talentsync.config import (
    ConfigurationError,
    configure_logging,
    example_sync_config,
    get_storage_config,
    load_sync_config,
)
from talentsync.domain.errors import SyncError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep WoW talent loadouts in sync with Archon")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Fetch builds and update TalentLoadoutsEx.lua")
    sync.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the JSON sync configuration (defaults to the data directory)",
    )
    sync.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Override the configured TalentLoadoutsEx.lua path",
    )
    sync.add_argument(
        "--clear-previous",
        action="store_true",
        help="Remove every generated build, not only those being refreshed",
    )

    subparsers.add_parser("discover", help="List current raid bosses and dungeons")
    subparsers.add_parser("find-install", help="Print the detected WoW installation path")

    scan = subparsers.add_parser("scan", help="List characters of a WoW installation")
    scan.add_argument(
        "--install",
        type=Path,
        default=None,
        help="Path to the _retail_ directory (auto-detected when omitted)",
    )

    subparsers.add_parser("example-config", help="Print an example sync configuration")

    return parser.parse_args(list(argv))


def _run_sync(args: argparse.Namespace) -> None:
    config_path = args.config or get_storage_config().config_path()
    config = load_sync_config(config_path)
    overrides: dict[str, object] = {}
    if args.output is not None:
        overrides["output_path"] = args.output
    if args.clear_previous:
        overrides["clear_previous_builds"] = True
    if overrides:
        config = config.model_copy(update=overrides)
    summary = sync_talent_loadouts_from_config(config)
    print(
        f"Updated {summary.total_entries} talents "
        f"({summary.raid_entries} raid, {summary.dungeon_entries} M+) "
        f"for {summary.characters_processed} characters"
    )


def _run_scan(args: argparse.Namespace) -> None:
    install = args.install or find_install_path()
    if install is None:
        raise ConfigurationError("Could not find WoW installation; pass --install")
    for character in scan_characters(install):
        output_path = talent_loadouts_path(install, character.account_id)
        print(f"{character.account_id}\t{character.realm}\t{character.name}\t{output_path}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "sync":
            _run_sync(parsed_args)
        elif parsed_args.command == "discover":
            content = discover_content()
            print(
                json.dumps(
                    {"raidBosses": content.raid_bosses, "dungeons": content.dungeons},
                    indent=2,
                )
            )
        elif parsed_args.command == "find-install":
            install = find_install_path()
            if install is None:
                raise ConfigurationError("Could not find WoW installation")  # noqa: TRY301
            print(install)
        elif parsed_args.command == "scan":
            _run_scan(parsed_args)
        elif parsed_args.command == "example-config":
            print(example_sync_config().model_dump_json(by_alias=True, indent=2))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except SyncError as exc:
        log.error("Talent sync aborted during %s stage: %s", exc.stage, exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
