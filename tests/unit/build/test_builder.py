"""Tests for category dispatch and build orchestration."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from helpers.io_utils import agent_template, write_tree
from reaper.core.build.builder import TemplateBuilder
from reaper.core.build.stats import BuildStats
from reaper.core.config import BuildConfig


def test_missing_category_directory_is_noop(build_config: BuildConfig, capsys) -> None:
    builder = TemplateBuilder(build_config)
    builder.build_category("hooks")
    assert builder.stats == BuildStats()
    assert "Building hooks" not in capsys.readouterr().out


def test_invalid_category_rejected(build_config: BuildConfig) -> None:
    with pytest.raises(ValueError, match="Invalid type 'widgets'"):
        TemplateBuilder(build_config).build_category("widgets")


def test_dispatch_renders_templates_and_copies_the_rest(
    build_config: BuildConfig, source_root: Path, output_root: Path
) -> None:
    write_tree(
        source_root,
        {
            "skills/worktree-manager/SKILL.j2": "{{ SKILL_NAME }} < {{ PARENT_SKILL }}\n",
            "skills/worktree-manager/scripts/worktree-create.sh": "#!/bin/sh\necho {{ raw }}\n",
            "skills/worktree-manager/scripts/lib/helpers.sh": "helpers\n",
            "skills/standalone.j2": "{{ PARENT_SKILL is none }}\n",
            "skills/README.txt": "static\n",
        },
    )
    builder = TemplateBuilder(build_config)
    builder.build_category("skills")

    skills_out = output_root / "skills"
    assert (skills_out / "worktree-manager" / "SKILL.md").read_text() == "SKILL < worktree-manager\n"
    assert (skills_out / "standalone.md").read_text() == "True\n"
    assert (skills_out / "worktree-manager" / "scripts" / "worktree-create.sh").read_text() == (
        "#!/bin/sh\necho {{ raw }}\n"
    )
    assert (skills_out / "worktree-manager" / "scripts" / "lib" / "helpers.sh").exists()
    assert (skills_out / "README.txt").read_text() == "static\n"
    assert not (skills_out / "worktree-manager" / "SKILL.j2").exists()
    assert builder.stats.success == 5
    assert builder.stats.errors == 0


def test_custom_suffixes_and_directories(
    build_config: BuildConfig, source_root: Path, output_root: Path
) -> None:
    config = replace(
        build_config,
        template_suffix=".tmpl",
        output_suffix=".txt",
        directories={**build_config.directories, "commands": "slash-commands"},
    )
    write_tree(source_root, {"commands/go.tmpl": "go {{ FILENAME }}\n"})
    builder = TemplateBuilder(config)
    builder.build_category("commands")
    assert (output_root / "slash-commands" / "go.txt").read_text() == "go go\n"


def test_build_resets_stats_between_runs(
    build_config: BuildConfig, source_root: Path
) -> None:
    write_tree(source_root, {"hooks/h.j2": "{{ HOOK_NAME }}\n"})
    builder = TemplateBuilder(build_config)
    builder.stats.record_failure("stale")
    builder.stats.record_tokens("stale-agent", 99)

    builder.build()
    builder.build()

    assert builder.stats.success == 1
    assert builder.stats.errors == 0
    assert builder.stats.error_messages == []
    assert builder.stats.token_counts == {}


def test_build_without_source_dir(build_config: BuildConfig, source_root: Path, capsys) -> None:
    source_root.rmdir()
    stats = TemplateBuilder(build_config).build()
    assert stats.success == 0
    assert "Nothing to build" in capsys.readouterr().out


def test_category_restriction(
    build_config: BuildConfig, source_root: Path, output_root: Path
) -> None:
    write_tree(
        source_root,
        {
            "agents/bug-fixer.j2": agent_template("bug-fixer"),
            "hooks/h.j2": "hook\n",
        },
    )
    stats = TemplateBuilder(replace(build_config, category="hooks")).build()
    assert stats.success == 1
    assert (output_root / "hooks" / "h.md").exists()
    assert not (output_root / "agents").exists()
    assert stats.token_counts == {}


def test_failures_do_not_stop_the_build(
    build_config: BuildConfig, source_root: Path, output_root: Path, capsys
) -> None:
    write_tree(
        source_root,
        {
            "agents/bug-fixer.j2": agent_template("bug-fixer"),
            "agents/unlisted.j2": "# {{ AGENT_NAME }}\n",
            "commands/broken.j2": "{% if %}\n",
            "commands/fine.j2": "fine\n",
        },
    )
    stats = TemplateBuilder(build_config).build()

    assert stats.success == 2
    assert stats.errors == 2
    assert [m.split(":")[0] for m in stats.error_messages] == [
        "agents/unlisted.j2",
        "commands/broken.j2",
    ]
    assert (output_root / "commands" / "fine.md").exists()
    out = capsys.readouterr().out
    assert "Errors:  2" in out
    assert "Token Summary (agents):" in out


def test_token_summary_printed_only_for_agents(
    build_config: BuildConfig, source_root: Path, capsys
) -> None:
    write_tree(source_root, {"commands/c.j2": "c\n"})
    TemplateBuilder(build_config).build()
    assert "Token Summary" not in capsys.readouterr().out


def test_injected_estimator(build_config: BuildConfig, source_root: Path) -> None:
    write_tree(source_root, {"agents/test-runner.j2": "x\n"})
    builder = TemplateBuilder(build_config, estimator=lambda text: 7)
    builder.build()
    assert builder.stats.token_counts == {"test-runner": 7}
