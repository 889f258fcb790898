"""
Reaper build command.

SUMMARY: Render template sources into agents/, skills/, hooks/ and commands/
"""
from __future__ import annotations

import argparse
import sys
from contextlib import nullcontext, redirect_stdout
from typing import Any, Dict

from reaper.cli import (
    OutputFormatter,
    add_json_flag,
    add_repo_root_flag,
    add_verbose_flag,
    get_repo_root,
)
from reaper.core.build import CATEGORIES, TemplateBuilder
from reaper.core.config import load_build_config
from reaper.core.exceptions import ReaperError
from reaper.core.utils.logging import configure_logging

SUMMARY = "Render template sources into agents/, skills/, hooks/ and commands/"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--type",
        "-t",
        dest="category",
        choices=list(CATEGORIES),
        help="Only build one category",
    )
    parser.add_argument(
        "--source",
        type=str,
        help="Template source directory (default: build.source_dir from config)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output root directory (default: build.output_dir from config)",
    )
    add_verbose_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    build: Dict[str, Any] = {}
    if getattr(args, "category", None):
        build["category"] = args.category
    if getattr(args, "source", None):
        build["source_dir"] = args.source
    if getattr(args, "output", None):
        build["output_dir"] = args.output
    overrides: Dict[str, Any] = {"build": build} if build else {}
    if getattr(args, "verbose", False):
        overrides["logging"] = {"verbose": True}
    return overrides


def main(args: argparse.Namespace) -> int:
    """Run the template build; exit 1 when any file failed."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        config = load_build_config(repo_root, _overrides(args))
    except ReaperError as err:
        formatter.error(err, error_code="config_error")
        return 1

    configure_logging(verbose=config.verbose)

    # In JSON mode progress output goes to stderr so stdout stays parseable.
    progress = redirect_stdout(sys.stderr) if formatter.json_mode else nullcontext()
    with progress:
        stats = TemplateBuilder(config).build()

    if formatter.json_mode:
        formatter.json_output(
            {
                "status": "success" if stats.ok else "error",
                "source_dir": str(config.source_dir),
                "output_dir": str(config.output_dir),
                "category": config.category,
                **stats.to_dict(),
            }
        )

    return 0 if stats.ok else 1
