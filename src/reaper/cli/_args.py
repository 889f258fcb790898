"""Flags shared by several Reaper commands."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """``--json``: machine-readable result on stdout, progress on stderr."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """``--repo-root``: project root holding ``.reaper/`` and the source tree."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Project root (default: nearest ancestor with .reaper/ or .git/)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-file processing details",
    )


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_verbose_flag",
]
