"""Artifact writing for the template build.

``ArtifactWriter.write`` renders one template source into its output file;
``ArtifactWriter.copy`` mirrors a non-template file byte for byte. Both
record their outcome in ``BuildStats`` and return a bool: a failing file is
reported and counted, never raised, so the rest of the build carries on.
"""
from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import Union

from ..classification import DEFAULT_REGISTRY, ClassificationRegistry
from ..exceptions import ClassificationError, SourceNotFoundError, TemplateRenderError
from ..utils.text import split_frontmatter
from .compiler import TemplateCompiler
from .stats import BuildStats
from .tokens import TokenEstimator, estimate_tokens
from .variables import AGENTS, derive_variables

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_TEMPLATE_SUFFIX = ".j2"


class ArtifactWriter:
    """Render template sources and copy static files into the output tree."""

    def __init__(
        self,
        compiler: TemplateCompiler,
        stats: BuildStats,
        *,
        registry: ClassificationRegistry = DEFAULT_REGISTRY,
        estimator: TokenEstimator = estimate_tokens,
        template_suffix: str = DEFAULT_TEMPLATE_SUFFIX,
        encoding: str = "utf-8",
    ) -> None:
        self.compiler = compiler
        self.stats = stats
        self.registry = registry
        self.estimator = estimator
        self.template_suffix = template_suffix
        self.encoding = encoding

    def item_name(self, source_path: PathLike) -> str:
        """File name with the template suffix removed."""
        name = Path(source_path).name
        if self.template_suffix and name.endswith(self.template_suffix):
            return name[: -len(self.template_suffix)]
        return name

    def _read_source(self, source_path: Path) -> str:
        try:
            return source_path.read_text(encoding=self.encoding)
        except FileNotFoundError as err:
            raise SourceNotFoundError(
                f"Source file not found: {source_path}",
                context={"source_path": str(source_path)},
            ) from err

    def render(self, source_path: PathLike, category: str, relative_path: str) -> str:
        """Return the final artifact text for ``source_path``.

        Raises:
            SourceNotFoundError: If the source does not exist.
            ClassificationError: If an agent is missing from the registry.
            TemplateRenderError: If the body fails to render.
        """
        source = Path(source_path)
        content = self._read_source(source)
        record = split_frontmatter(content)
        variables = derive_variables(
            category, self.item_name(source), relative_path, registry=self.registry
        )
        body = self.compiler.compile(record.body, variables, source)
        return (record.header or "") + body

    def write(
        self,
        source_path: PathLike,
        output_path: PathLike,
        category: str,
        relative_path: str,
    ) -> bool:
        """Render ``source_path`` into ``output_path``; True on success."""
        source = Path(source_path)
        output = Path(output_path)
        logger.debug("Processing: %s", source)
        logger.debug("Output: %s", output)

        try:
            final = self.render(source, category, relative_path)
            tokens = self.estimator(final) if category == AGENTS else None
            if not output.parent.exists():
                output.parent.mkdir(parents=True, exist_ok=True)
                logger.debug("Created directory: %s", output.parent)
            output.write_text(final, encoding=self.encoding)
        except (ClassificationError, TemplateRenderError, OSError, ValueError) as err:
            # SourceNotFoundError is an OSError; UnicodeError is a ValueError.
            return self._fail(relative_path, str(err))

        print(f"  [OK] {relative_path}")
        self.stats.record_success()
        if tokens is not None:
            self.stats.record_tokens(self.item_name(source), tokens)
        return True

    def copy(self, source_path: PathLike, output_path: PathLike, relative_path: str) -> bool:
        """Copy a non-template file to ``output_path``; True on success."""
        source = Path(source_path)
        output = Path(output_path)
        logger.debug("Copying: %s -> %s", source, output)

        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, output)
            # Packaged helper scripts keep their executable bit.
            shutil.copymode(source, output)
        except OSError as err:
            message = str(err)
            print(f"  [ERROR] {relative_path}: {message}", file=sys.stderr)
            self.stats.record_failure(f"{relative_path}: {message}")
            return False

        print(f"  [COPY] {relative_path}")
        self.stats.record_success()
        return True

    def _fail(self, relative_path: str, message: str) -> bool:
        print(f"  [ERROR] {relative_path}", file=sys.stderr)
        print(f"          {message}", file=sys.stderr)
        self.stats.record_failure(f"{relative_path}: {message}")
        return False


__all__ = ["ArtifactWriter", "DEFAULT_TEMPLATE_SUFFIX"]
