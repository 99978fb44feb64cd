"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("reposync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reposync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    update_parser = subparsers.add_parser("update", help="Reconcile stored repositories with their providers")
    update_parser.add_argument("--config", default="./reposync.json", help="Path to reposync.json")
    update_parser.add_argument("--owner", default=None, help="Reconcile only this owner instead of every owner")
    mode = update_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--dry-run", action="store_true", help="Preview mode")
    mode.add_argument("--apply", action="store_true", help="Apply mode")
    update_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    validate_parser = subparsers.add_parser("validate", help="Check repository URLs before they are declared")
    validate_parser.add_argument("--config", default="./reposync.json", help="Path to reposync.json")
    validate_parser.add_argument("--owner", required=True, help="Owner submitting the URLs")
    validate_parser.add_argument("urls", nargs="+", metavar="URL", help="Repository URLs to validate")
    validate_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    help_parser = subparsers.add_parser("help-text", help="Print accepted URL formats for enabled providers")
    help_parser.add_argument("--config", default="./reposync.json", help="Path to reposync.json")
    help_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
