"""End-to-end build over a small source tree."""

from __future__ import annotations

from pathlib import Path

from helpers.io_utils import agent_template, write_tree
from reaper.core.build.builder import TemplateBuilder
from reaper.core.build.tokens import estimate_tokens
from reaper.core.config import BuildConfig


def test_agent_and_skill_build(
    build_config: BuildConfig, source_root: Path, output_root: Path, capsys
) -> None:
    write_tree(
        source_root,
        {
            "partials/git-prohibitions.md": "Never push from {{ AGENT_NAME }}.\n",
            "agents/feature-developer.j2": agent_template("feature-developer")
            + '{% if HAS_GIT_PROHIBITIONS %}{% include "git-prohibitions.md" %}{% endif %}\n',
            "skills/orchestration/takeoff.j2": "---\nname: takeoff\n---\n{{ SKILL_NAME }} in {{ PARENT_SKILL }}\n",
        },
    )

    stats = TemplateBuilder(build_config).build()

    assert stats.success == 2
    assert stats.errors == 0

    agent_out = output_root / "agents" / "feature-developer.md"
    skill_out = output_root / "skills" / "orchestration" / "takeoff.md"
    agent_text = agent_out.read_text(encoding="utf-8")
    assert agent_text.startswith("---\nname: feature-developer\n")
    assert "# feature-developer (coding)" in agent_text
    assert "Never push from feature-developer." in agent_text
    assert skill_out.read_text(encoding="utf-8") == "---\nname: takeoff\n---\ntakeoff in orchestration\n"

    assert stats.token_counts == {"feature-developer": estimate_tokens(agent_text)}

    out = capsys.readouterr().out
    summary = out.split("Token Summary (agents):", 1)[1]
    entries = [line.split()[0] for line in summary.strip().splitlines()]
    assert entries == ["feature-developer"]
