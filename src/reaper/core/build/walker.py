"""Recursive source file discovery."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


def find_files(root: Union[str, Path], into: Optional[List[str]] = None) -> List[str]:
    """Collect absolute paths of all regular files below ``root``.

    Entries are visited in name order, depth first. A directory that cannot
    be listed is logged and skipped; whatever was collected so far is
    returned instead of raising. Symbolic links are skipped, so link
    cycles cannot recurse.

    Args:
        root: Directory to walk.
        into: Accumulator to append to (a new list when omitted).

    Returns:
        The accumulator, unchanged when ``root`` does not exist.
    """
    files: List[str] = [] if into is None else into
    root_path = Path(root)
    if not root_path.exists():
        return files

    try:
        with os.scandir(root_path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as err:
        logger.error("Failed to read directory %s: %s", root_path, err)
        return files

    for entry in entries:
        full_path = root_path / entry.name
        try:
            # Symlinks are neither followed nor collected.
            if entry.is_symlink():
                logger.debug("Skipping symlink %s", full_path)
                continue
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
        except OSError as err:
            logger.error("Failed to inspect %s: %s", full_path, err)
            continue
        if is_dir:
            find_files(full_path, files)
        elif is_file:
            files.append(str(full_path.absolute()))

    return files


__all__ = ["find_files"]
