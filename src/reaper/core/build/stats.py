"""Build statistics.

One ``BuildStats`` instance accumulates the outcome of a build: it is reset
at the start of every orchestrated build and updated by the artifact writer
and copier for each file.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class BuildStats:
    """Per-build success/failure counters and agent token estimates."""

    success: int = 0
    errors: int = 0
    error_messages: List[str] = field(default_factory=list)
    # Agent name -> estimated token count (agents category only)
    token_counts: Dict[str, int] = field(default_factory=dict)

    def reset(self) -> None:
        self.success = 0
        self.errors = 0
        self.error_messages = []
        self.token_counts = {}

    def record_success(self) -> None:
        self.success += 1

    def record_failure(self, message: str) -> None:
        self.errors += 1
        self.error_messages.append(message)

    def record_tokens(self, item_name: str, count: int) -> None:
        self.token_counts[item_name] = count

    @property
    def ok(self) -> bool:
        """True when no file failed."""
        return self.errors == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to a dictionary for JSON output."""
        return {
            "success": self.success,
            "errors": self.errors,
            "error_messages": list(self.error_messages),
            "token_counts": dict(self.token_counts),
        }

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Build Summary:",
            f"  Success: {self.success}",
            f"  Errors:  {self.errors}",
        ]
        if self.error_messages:
            lines.append("")
            lines.append("Errors:")
            for msg in self.error_messages:
                lines.append(f"  - {msg}")
        return "\n".join(lines)


__all__ = ["BuildStats"]
