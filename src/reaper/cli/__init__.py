"""
Reaper CLI package.

Commands live in ``reaper.cli.commands`` and are discovered automatically;
each module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args)``.
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_repo_root_flag, add_verbose_flag
from ._utils import get_repo_root, resolve_project_root

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_verbose_flag",
    "get_repo_root",
    "resolve_project_root",
]
