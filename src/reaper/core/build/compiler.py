"""Jinja2 template compilation for source bodies.

Bodies are rendered synchronously in a single pass. ``{% include %}``
directives resolve through a Jinja2 loader rooted at the source directory
(and its ``partials/`` folder by default); callers may pass their own loader
to render against a synthetic tree.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, StrictUndefined

from ..exceptions import TemplateRenderError

DEFAULT_PARTIALS_DIR = "partials"


def format_render_error(err: object) -> str:
    """Return a uniform message for a rendering failure.

    ``Line <n>: <message>`` when the failure carries a line number, otherwise
    the raw message unchanged (multi-line diagnostics included). Values that
    are not exceptions are converted with ``str()``.
    """
    if not isinstance(err, BaseException):
        return str(err)

    message = getattr(err, "message", None)
    if not isinstance(message, str):
        message = str(err)

    lineno = getattr(err, "lineno", None)
    if lineno:
        return f"Line {lineno}: {message}"
    return message


def default_loader(
    source_root: Union[str, Path], partials_dir: str = DEFAULT_PARTIALS_DIR
) -> FileSystemLoader:
    """Loader searching ``source_root`` then ``source_root/partials_dir``."""
    root = Path(source_root)
    search_path: Sequence[str] = [str(root), str(root / partials_dir)]
    return FileSystemLoader(search_path, encoding="utf-8")


class TemplateCompiler:
    """Render template bodies against a variable set."""

    def __init__(
        self,
        source_root: Union[str, Path],
        *,
        loader: Optional[BaseLoader] = None,
        partials_dir: str = DEFAULT_PARTIALS_DIR,
    ) -> None:
        self.source_root = Path(source_root)
        self.loader = loader if loader is not None else default_loader(self.source_root, partials_dir)
        # Control blocks usually sit on their own lines in prompt templates.
        # Without trimming, those tag-only lines become empty lines.
        self.env = Environment(
            loader=self.loader,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def compile(
        self,
        body: str,
        variables: Mapping[str, Any],
        source_path: Union[str, Path, None] = None,
    ) -> str:
        """Render ``body`` with ``variables``.

        Raises:
            TemplateRenderError: On syntax errors, undefined variables,
                missing includes or any exception raised while rendering.
        """
        if not body:
            return ""
        try:
            template = self.env.from_string(body)
            return template.render(**variables)
        except Exception as err:
            raise TemplateRenderError(
                format_render_error(err),
                context={
                    "source_path": str(source_path) if source_path else None,
                    "line": getattr(err, "lineno", None),
                },
            ) from err


__all__ = [
    "DEFAULT_PARTIALS_DIR",
    "TemplateCompiler",
    "default_loader",
    "format_render_error",
]
