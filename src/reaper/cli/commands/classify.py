"""
Reaper classify command.

SUMMARY: Show the agent classification used for template variables
"""
from __future__ import annotations

import argparse

from reaper.cli import OutputFormatter, add_json_flag
from reaper.core.classification import DEFAULT_REGISTRY, UNKNOWN

SUMMARY = "Show the agent classification used for template variables"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "names",
        nargs="*",
        help="Agent names to look up (default: list the whole registry)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Print each agent's group; exit 1 if any name is unclassified."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    registry = DEFAULT_REGISTRY
    names = list(args.names) or list(registry.all_agents())

    rows = [
        {
            "name": name,
            "type": registry.category_of(name),
            "tdd": registry.is_tdd(name),
        }
        for name in names
    ]
    unknown = [row["name"] for row in rows if row["type"] == UNKNOWN]

    if formatter.json_mode:
        formatter.json_output({"agents": rows, "unknown": unknown})
    else:
        width = max(len(name) for name in names)
        for row in rows:
            suffix = " (tdd)" if row["tdd"] else ""
            formatter.text(f"{row['name'].ljust(width)}  {row['type']}{suffix}")
        if unknown:
            formatter.text(
                f"\n{len(unknown)} unclassified agent(s). Add them to AGENT_GROUPS in {registry.location}."
            )

    return 1 if unknown else 0
