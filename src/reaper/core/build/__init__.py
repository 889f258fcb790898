"""Template build pipeline.

- variables: per-file template variables
- compiler: Jinja2 rendering with include resolution
- writer: render/copy one file, recording the outcome
- walker: recursive source discovery
- builder: category dispatch and build orchestration
- stats / tokens: build statistics and token reporting
"""
from __future__ import annotations

from .builder import TemplateBuilder, build
from .compiler import TemplateCompiler, format_render_error
from .stats import BuildStats
from .tokens import estimate_tokens, print_token_summary
from .variables import CATEGORIES, derive_variables
from .walker import find_files
from .writer import ArtifactWriter

__all__ = [
    "TemplateBuilder",
    "build",
    "TemplateCompiler",
    "format_render_error",
    "BuildStats",
    "estimate_tokens",
    "print_token_summary",
    "CATEGORIES",
    "derive_variables",
    "find_files",
    "ArtifactWriter",
]
