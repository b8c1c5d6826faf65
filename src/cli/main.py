"""Sdeload CLI entry points.
This module exposes install, check, and version commands.
It maps argparse commands onto SDK calls and prints YAML reports.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

import yaml

from core.config import SdeConfig
from core.constants import DEFAULT_IMPORT_PROFILE
from core.errors import SdeError, SdeImportError
from core.types import ImportReport, InstallOptions, ReleaseCheck, SdeVersion
from ingest.release_check import STATUS_MESSAGES
from mapping.source_files import IMPORT_PROFILES
from store.sde_client import SdeClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sdeload", description="Static data export loader")
    parser.add_argument("--data-path", help="Override SDE_DATA_PATH for this command")
    parser.add_argument("--database", help="Override SDE_DATABASE_PATH for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_install_command(subparsers)
    _add_check_command(subparsers)
    _add_version_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sdeload CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_path, args.database)
        if args.command == "install":
            return _run_install_command(client, args)
        if args.command == "check":
            return _run_check_command(client)
        if args.command == "version":
            return _run_version_command(client, args)
    except SdeImportError as error:
        _print_yaml(_report_payload(error.report))
        return 1
    except SdeError as error:
        _print_yaml({"status": "error", "message": str(error)})
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_path: str | None, database: str | None) -> SdeClient:
    """Build SDK client with optional path overrides."""
    config = SdeConfig.from_env()
    if data_path:
        config = replace(config, data_path=Path(data_path).expanduser().resolve())
    if database:
        config = replace(config, database_path=Path(database).expanduser().resolve())
    return SdeClient(config)


def _run_install_command(client: SdeClient, args: argparse.Namespace) -> int:
    """Handle install command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = InstallOptions(
        data_path=args.path,
        build_number=args.build,
        force=args.force,
        profile=args.profile,
        chunk_size=args.chunk_size,
    )
    report = client.install(options)
    _print_yaml(_report_payload(report))
    return 0


def _run_check_command(client: SdeClient) -> int:
    """Handle check command."""
    result = client.check()
    _print_yaml(_check_payload(result))
    return 0


def _run_version_command(client: SdeClient, args: argparse.Namespace) -> int:
    """Handle version command."""
    version = client.version(args.path)
    payload = _version_payload(version)
    installed = client.installed()
    payload["installed"] = installed.version if installed else None
    _print_yaml(payload)
    return 0


def _report_payload(report: ImportReport) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": report.status}
    if report.version is not None:
        payload.update(_version_payload(report.version))
    if report.row_counts:
        payload["tables_imported"] = len(report.row_counts)
        payload["total_rows"] = sum(report.row_counts.values())
        payload["row_counts"] = dict(report.row_counts)
    if report.skipped:
        payload["skipped"] = list(report.skipped)
    if report.error:
        payload["error"] = report.error
    return payload


def _check_payload(result: ReleaseCheck) -> dict[str, Any]:
    return {
        "status": result.status,
        "message": STATUS_MESSAGES[result.status],
        "update_available": result.update_available,
        "latest": {
            "build_number": result.latest.build_number,
            "release_date": result.latest.release_date,
        },
        "installed": {
            "version": result.installed_version,
            "build_number": result.installed_build,
        },
    }


def _version_payload(version: SdeVersion) -> dict[str, Any]:
    return {
        "version": version.version,
        "build_number": version.build_number,
        "release_date": version.release_date,
    }


def _print_yaml(payload: dict[str, Any]) -> None:
    print(yaml.safe_dump(payload, sort_keys=False, default_flow_style=False), end="")


def _add_install_command(subparsers: Any) -> None:
    """Register install subcommand."""
    parser = subparsers.add_parser("install", help="Import an export archive")
    parser.add_argument("build", nargs="?", type=int, help="Specific build number to install")
    parser.add_argument("--path", help="Archive file or directory to import")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-import even when this version is already installed",
    )
    parser.add_argument(
        "--profile",
        default=DEFAULT_IMPORT_PROFILE,
        choices=sorted(IMPORT_PROFILES),
        help="Import profile selecting which files load",
    )
    parser.add_argument("--chunk-size", type=int, help="Override SDE_CHUNK_SIZE")


def _add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    subparsers.add_parser("check", help="Compare installed version with latest release")


def _add_version_command(subparsers: Any) -> None:
    """Register version subcommand."""
    parser = subparsers.add_parser("version", help="Show archive version metadata")
    parser.add_argument("--path", help="Archive file or directory to inspect")
