"""Build orchestration: walk each category's sources and dispatch per file.

Template sources (``*.j2`` by default) are rendered through
:class:`~reaper.core.build.writer.ArtifactWriter`; every other file is copied
verbatim. The output tree mirrors the source tree, so packaged helper scripts
under e.g. ``skills/<name>/scripts/`` land at the same relative location.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from jinja2 import BaseLoader

from ..classification import DEFAULT_REGISTRY, ClassificationRegistry
from ..config import BuildConfig
from .compiler import TemplateCompiler
from .stats import BuildStats
from .tokens import TokenEstimator, get_estimator, print_token_summary
from .variables import CATEGORIES
from .walker import find_files
from .writer import ArtifactWriter

logger = logging.getLogger(__name__)

BANNER = "Reaper Template Build"


class TemplateBuilder:
    """Build all (or one) source categories into the output tree.

    Holds the run configuration and the statistics for the current build;
    nothing is shared between builder instances.
    """

    def __init__(
        self,
        config: BuildConfig,
        *,
        registry: ClassificationRegistry = DEFAULT_REGISTRY,
        stats: Optional[BuildStats] = None,
        loader: Optional[BaseLoader] = None,
        estimator: Optional[TokenEstimator] = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.stats = stats if stats is not None else BuildStats()
        self.compiler = TemplateCompiler(
            config.source_dir, loader=loader, partials_dir=config.partials_dir
        )
        if estimator is None:
            estimator = get_estimator(config.token_estimator, **config.estimator_options())
        self.writer = ArtifactWriter(
            self.compiler,
            self.stats,
            registry=registry,
            estimator=estimator,
            template_suffix=config.template_suffix,
        )

    # ----- Paths -----
    def _check_category(self, category: str) -> None:
        if category not in CATEGORIES:
            raise ValueError(
                f"Invalid type '{category}'. Valid types: {', '.join(CATEGORIES)}"
            )

    def source_dir_for(self, category: str) -> Path:
        return self.config.source_dir / category

    def output_dir_for(self, category: str) -> Path:
        return self.config.output_dir / self.config.directories.get(category, category)

    def output_name(self, relative_from_category: str) -> str:
        """Swap the template suffix for the output suffix."""
        suffix = self.config.template_suffix
        return relative_from_category[: -len(suffix)] + self.config.output_suffix

    # ----- Build steps -----
    def build_category(self, category: str) -> None:
        """Render and copy every file of one category."""
        self._check_category(category)
        source_dir = self.source_dir_for(category)
        output_dir = self.output_dir_for(category)

        if not source_dir.is_dir():
            logger.debug("Skipping %s: source directory does not exist", category)
            return

        print(f"\nBuilding {category}...")

        for source_path in find_files(source_dir):
            relative_path = os.path.relpath(source_path, self.config.source_dir)
            relative_from_category = os.path.relpath(source_path, source_dir)

            if source_path.endswith(self.config.template_suffix):
                output_path = output_dir / self.output_name(relative_from_category)
                self.writer.write(source_path, output_path, category, relative_path)
            else:
                output_path = output_dir / relative_from_category
                self.writer.copy(source_path, output_path, relative_path)

    def build(self) -> BuildStats:
        """Run a full build (or the configured category) and print summaries."""
        print(BANNER)
        print("=" * len(BANNER))

        self.stats.reset()

        if not self.config.source_dir.is_dir():
            print(f"\nNo {self.config.source_dir} directory found. Nothing to build.")
            return self.stats

        if self.config.category:
            self.build_category(self.config.category)
        else:
            for category in CATEGORIES:
                self.build_category(category)

        self.print_summary()
        if self.stats.token_counts:
            print()
            print_token_summary(self.stats.token_counts)
        return self.stats

    def print_summary(self) -> None:
        print("\n" + "-" * 26)
        print(self.stats.summary())
        print("-" * 26)


def build(config: BuildConfig, **kwargs) -> BuildStats:
    """Module-level convenience wrapper to run a build."""
    return TemplateBuilder(config, **kwargs).build()


__all__ = ["TemplateBuilder", "build", "BANNER"]
