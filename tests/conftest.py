import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'reaper' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from reaper.core.config import BuildConfig  # noqa: E402
from reaper.data import clear_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_reaper_env(monkeypatch: pytest.MonkeyPatch):
    """Drop REAPER_* overrides from the developer shell and reset data caches.

    Config loading reads REAPER_* variables; a stray one in a developer shell
    would silently change what the build tests see.
    """
    for key in list(os.environ):
        if key.startswith("REAPER_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    clear_caches()


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Empty template source root (``<tmp>/src``)."""
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def build_config(tmp_path: Path, source_root: Path, output_root: Path) -> BuildConfig:
    """BuildConfig rooted in ``tmp_path`` with default suffixes and directories."""
    return BuildConfig(
        repo_root=tmp_path,
        source_dir=source_root,
        output_dir=output_root,
    )
