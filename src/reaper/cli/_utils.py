"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from reaper.core.config import PROJECT_CONFIG_DIR

# Markers that identify a project root when walking up from the cwd.
_ROOT_MARKERS = (PROJECT_CONFIG_DIR, ".git")


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Return the nearest ancestor of ``start`` holding ``.reaper`` or ``.git``.

    Falls back to ``start`` (default: cwd) when no marker is found.
    """
    origin = Path(start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return origin


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


__all__ = ["get_repo_root", "resolve_project_root"]
