from __future__ import annotations

from typing import Any, Dict, Mapping


class ReaperError(Exception):
    """Base exception for the Reaper build pipeline."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ClassificationError(ReaperError, LookupError):
    """Raised when an agent name has no entry in the classification registry."""

    def __init__(self, item_name: str, *, registry: str) -> None:
        message = (
            f'Agent "{item_name}" has no classification. '
            f"Add it to AGENT_GROUPS in {registry} or rename the file."
        )
        ReaperError.__init__(
            self, message, context={"item_name": item_name, "registry": registry}
        )
        LookupError.__init__(self, message)
        self.item_name = item_name
        self.registry = registry


class SourceNotFoundError(ReaperError, FileNotFoundError):
    """Raised when a template source file does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ReaperError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class TemplateRenderError(ReaperError):
    """Raised when the template engine fails to render a body."""


class ConfigError(ReaperError, ValueError):
    """Raised when build configuration is missing or invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ReaperError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ReaperError",
    "ClassificationError",
    "SourceNotFoundError",
    "TemplateRenderError",
    "ConfigError",
]
