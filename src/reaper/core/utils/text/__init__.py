"""Text processing utilities.

- frontmatter: verbatim frontmatter splitting for template sources
"""
from __future__ import annotations

from .frontmatter import (
    FRONTMATTER_DELIMITER,
    FrontmatterRecord,
    split_frontmatter,
    has_frontmatter,
)

__all__ = [
    "FRONTMATTER_DELIMITER",
    "FrontmatterRecord",
    "split_frontmatter",
    "has_frontmatter",
]
