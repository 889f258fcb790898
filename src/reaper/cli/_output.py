"""Text/JSON output for Reaper commands.

In JSON mode only the final payload goes to stdout; errors are emitted as a
JSON object on stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Route command output according to ``--json``."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report ``error`` on stderr, with its ``context`` in JSON mode."""
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return

        payload: Dict[str, Any] = {"error": error_code, "message": msg}
        context = getattr(error, "context", None)
        if context:
            payload["context"] = context
        print(json.dumps(payload, indent=self.indent, default=str), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Print ``message`` unless in JSON mode."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
