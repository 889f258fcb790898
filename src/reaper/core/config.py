"""
Reaper build configuration (YAML, validated with JSON schema).

Precedence (in increasing order):
  1) Bundled defaults (``reaper/data/config/build.yaml``)
  2) Project overlay (``<repo_root>/.reaper/config.yml``)
  3) Environment overrides (``REAPER_*``)
  4) Explicit overrides passed by the caller (CLI flags)

Environment overrides:
- Path separator: double underscore ``__`` (e.g. ``REAPER_build__category=agents``).
- Type coercion: ``true``/``false``, ``null``/``none`` and integers are coerced;
  everything else stays a string.
"""
from __future__ import annotations

import copy
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema
import yaml

from reaper.data import read_json, read_yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "REAPER_"
PROJECT_CONFIG_DIR = ".reaper"
PROJECT_CONFIG_FILE = "config.yml"
SCHEMA_NAME = "build.schema.json"

DEFAULT_DIRECTORIES: Dict[str, str] = {
    "agents": "agents",
    "skills": "skills",
    "hooks": "hooks",
    "commands": "commands",
}


class ConfigManager:
    """Load, merge, and validate Reaper configuration.

    Typical usage:

    ```python
    mgr = ConfigManager(repo_root)
    cfg = mgr.load_config()
    ```
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root or Path.cwd()).expanduser().resolve()
        self.project_config_path = self.repo_root / PROJECT_CONFIG_DIR / PROJECT_CONFIG_FILE

    # ---------- Merge helpers ----------
    def deep_merge(self, base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``override`` into ``base`` returning a copy."""
        result: Dict[str, Any] = dict(base)
        for key, value in (override or {}).items():
            if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    # ---------- IO helpers ----------
    def load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML mapping; ``{}`` when the file does not exist.

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ConfigError(f"Invalid YAML in {path}: {err}", context={"path": str(path)}) from err
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a YAML mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    # ---------- Environment overrides ----------
    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none", "~"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        return s

    def _iter_env_overrides(self):
        """Yield ``(path_components, typed_value)`` for every ``REAPER_*`` variable."""
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__")
            if not raw or any(seg == "" for seg in segs):
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key '{key}'. Use double underscores between parts.",
                    context={"key": key},
                )
            yield [seg.lower() for seg in segs], self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Return ``cfg`` with ``REAPER_*`` overrides applied (copy)."""
        result = copy.deepcopy(cfg)
        for path, value in self._iter_env_overrides():
            logger.debug("Config override from environment: %s=%r", ".".join(path), value)
            self._set_nested(result, path, value)
        return result

    # ---------- Validation ----------
    def validate_schema(self, config: Dict[str, Any]) -> None:
        """Validate configuration against the bundled JSON schema.

        Raises:
            ConfigError: If validation fails.
        """
        schema = read_json("config", f"schemas/{SCHEMA_NAME}")
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as err:
            location = ".".join(str(p) for p in err.absolute_path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {location}: {err.message}",
                context={"path": location},
            ) from err

    # ---------- Public API ----------
    def load_config(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        validate: bool = True,
    ) -> Dict[str, Any]:
        """Load merged configuration (defaults → project → env → overrides)."""
        cfg = copy.deepcopy(read_yaml("config", "build.yaml"))
        project_cfg = self.load_yaml(self.project_config_path)
        if project_cfg:
            logger.debug("Loaded project config: %s", self.project_config_path)
        cfg = self.deep_merge(cfg, project_cfg)
        cfg = self.apply_env_overrides(cfg)
        if overrides:
            cfg = self.deep_merge(cfg, overrides)
        if validate:
            self.validate_schema(cfg)
        return cfg


@dataclass
class BuildConfig:
    """Typed view of the ``build``/``tokens``/``logging`` configuration."""

    repo_root: Path
    source_dir: Path
    output_dir: Path
    category: Optional[str] = None
    template_suffix: str = ".j2"
    output_suffix: str = ".md"
    partials_dir: str = "partials"
    directories: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DIRECTORIES))
    token_estimator: str = "chars"
    chars_per_token: int = 4
    token_encoding: str = "cl100k_base"
    verbose: bool = False

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any], repo_root: Path) -> "BuildConfig":
        build = cfg.get("build") or {}
        tokens = cfg.get("tokens") or {}
        log_cfg = cfg.get("logging") or {}
        root = Path(repo_root).expanduser().resolve()

        def _resolve(value: str) -> Path:
            path = Path(value).expanduser()
            return path if path.is_absolute() else (root / path).resolve()

        return cls(
            repo_root=root,
            source_dir=_resolve(build.get("source_dir", "src")),
            output_dir=_resolve(build.get("output_dir", ".")),
            category=build.get("category"),
            template_suffix=build.get("template_suffix", ".j2"),
            output_suffix=build.get("output_suffix", ".md"),
            partials_dir=build.get("partials_dir", "partials"),
            directories=dict(build.get("directories") or DEFAULT_DIRECTORIES),
            token_estimator=tokens.get("estimator", "chars"),
            chars_per_token=int(tokens.get("chars_per_token", 4)),
            token_encoding=tokens.get("encoding", "cl100k_base"),
            verbose=bool(log_cfg.get("verbose", False)),
        )

    def estimator_options(self) -> Dict[str, Any]:
        """Keyword arguments for :func:`reaper.core.build.tokens.get_estimator`."""
        if self.token_estimator == "tiktoken":
            return {"encoding": self.token_encoding}
        return {"chars_per_token": self.chars_per_token}


def load_build_config(
    repo_root: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> BuildConfig:
    """Load, validate and type the build configuration for ``repo_root``."""
    mgr = ConfigManager(repo_root)
    return BuildConfig.from_dict(mgr.load_config(overrides), mgr.repo_root)


__all__ = [
    "ConfigManager",
    "BuildConfig",
    "load_build_config",
    "ENV_PREFIX",
    "PROJECT_CONFIG_DIR",
    "PROJECT_CONFIG_FILE",
]
