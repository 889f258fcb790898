"""Frontmatter splitting for template sources.

Template sources may start with a YAML frontmatter block delimited by ``---``
lines. The block is never rendered or re-serialized: it is cut out of the
source exactly as written and re-attached to the rendered body, so key order,
quoting and comments survive the build.

Example:
    ```markdown
    ---
    name: bug-fixer
    description: "Fixes bugs --- with tests first"
    ---

    # {{ AGENT_NAME }}
    ```

Delimiters are matched on whole lines, never as substrings, and the body is
sliced by offset rather than pattern, so any character in the body is data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

FRONTMATTER_DELIMITER = "---"


@dataclass(frozen=True)
class FrontmatterRecord:
    """Result of splitting a source into its frontmatter header and body.

    Attributes:
        header: Raw header text from the opening delimiter through the closing
            delimiter line and its line break, or ``None`` when the source has
            no frontmatter.
        body: Everything after the header (the whole content when ``header``
            is ``None``).
    """

    header: Optional[str]
    body: str


def _lines(content: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(line_without_eol, end_offset)`` pairs, splitting on ``\\n`` only."""
    start = 0
    length = len(content)
    while start < length:
        nl = content.find("\n", start)
        end = length if nl == -1 else nl + 1
        yield content[start:end].rstrip("\r\n"), end
        start = end


def _is_delimiter(line: str) -> bool:
    return line == FRONTMATTER_DELIMITER


def split_frontmatter(content: str) -> FrontmatterRecord:
    """Split ``content`` into a verbatim frontmatter header and a body.

    The opening delimiter must be the first line. The header extends to the
    next delimiter line, including that line's line break when present. If no
    closing delimiter line exists the content is treated as having no
    frontmatter.

    Example:
        >>> rec = split_frontmatter("---\\nname: x\\n---\\n# Body\\n")
        >>> rec.header
        '---\\nname: x\\n---\\n'
        >>> rec.body
        '# Body\\n'
    """
    lines = _lines(content)
    first = next(lines, None)
    if first is None or not _is_delimiter(first[0]):
        return FrontmatterRecord(header=None, body=content)

    for line, end in lines:
        if _is_delimiter(line):
            return FrontmatterRecord(header=content[:end], body=content[end:])

    return FrontmatterRecord(header=None, body=content)


def has_frontmatter(content: str) -> bool:
    """Return True if ``content`` starts with a complete frontmatter block."""
    return split_frontmatter(content).header is not None


__all__ = [
    "FRONTMATTER_DELIMITER",
    "FrontmatterRecord",
    "split_frontmatter",
    "has_frontmatter",
]
