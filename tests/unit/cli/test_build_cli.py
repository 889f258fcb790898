"""Tests for `reaper build`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.io_utils import agent_template, write_tree
from reaper.cli._dispatcher import main


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_tree(
        tmp_path,
        {
            "src/agents/bug-fixer.j2": agent_template("bug-fixer"),
            "src/hooks/notify.j2": "{{ HOOK_NAME }}\n",
        },
    )
    return tmp_path


def test_build_succeeds(project: Path, capsys) -> None:
    code = main(["build", "--repo-root", str(project)])
    assert code == 0
    assert (project / "agents" / "bug-fixer.md").exists()
    assert (project / "hooks" / "notify.md").read_text() == "notify\n"
    out = capsys.readouterr().out
    assert "[OK] agents/bug-fixer.j2" in out
    assert "Success: 2" in out


def test_build_fails_with_exit_one(project: Path) -> None:
    write_tree(project, {"src/agents/unknown-agent.j2": "x\n"})
    assert main(["build", "--repo-root", str(project)]) == 1


def test_type_restriction(project: Path) -> None:
    assert main(["build", "--repo-root", str(project), "--type", "hooks"]) == 0
    assert (project / "hooks" / "notify.md").exists()
    assert not (project / "agents").exists()


def test_invalid_type_rejected(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", "--repo-root", str(project), "--type", "widgets"])
    assert excinfo.value.code == 2


def test_source_and_output_flags(tmp_path: Path) -> None:
    write_tree(tmp_path, {"templates/commands/go.j2": "go\n"})
    code = main(
        ["build", "--repo-root", str(tmp_path), "--source", "templates", "--output", "dist"]
    )
    assert code == 0
    assert (tmp_path / "dist" / "commands" / "go.md").read_text() == "go\n"


def test_json_output(project: Path, capsys) -> None:
    code = main(["build", "--repo-root", str(project), "--json"])
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert code == 0
    assert payload["status"] == "success"
    assert payload["success"] == 2
    assert payload["errors"] == 0
    assert list(payload["token_counts"]) == ["bug-fixer"]
    assert "[OK]" in captured.err


def test_config_error_exit(project: Path, capsys) -> None:
    write_tree(project, {".reaper/config.yml": "build:\n  template_suffix: nodot\n"})
    assert main(["build", "--repo-root", str(project)]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "build" in capsys.readouterr().out


def test_config_error_as_json(project: Path, capsys) -> None:
    write_tree(project, {".reaper/config.yml": "build:\n  category: widgets\n"})
    assert main(["build", "--repo-root", str(project), "--json"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    payload = json.loads(captured.err)
    assert payload["error"] == "config_error"
    assert payload["context"] == {"path": "build.category"}


def test_repo_root_detected_from_marker(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (project / ".reaper").mkdir()
    nested = project / "src" / "hooks"
    monkeypatch.chdir(nested)
    assert main(["build", "--type", "hooks"]) == 0
    assert (project / "hooks" / "notify.md").exists()
