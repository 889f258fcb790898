"""Template variable derivation.

Every source file is rendered against a fresh variable set. The base entries
are shared by all categories; each category then adds its own:

- agents:   AGENT_NAME, AGENT_TYPE, HAS_TDD, HAS_GIT_PROHIBITIONS and one
            IS_<GROUP>_AGENT flag per registry group (exactly one is true)
- skills:   SKILL_NAME, PARENT_SKILL (for nested skills)
- hooks:    HOOK_NAME
- commands: base entries only
"""
from __future__ import annotations

import os
import re
from typing import Dict, List, Optional, Union

from ..classification import CODING_GROUP, DEFAULT_REGISTRY, ClassificationRegistry
from ..exceptions import ClassificationError
from ..utils.time import utc_timestamp

VariableValue = Union[str, bool, None]
VariableSet = Dict[str, VariableValue]

AGENTS = "agents"
SKILLS = "skills"
HOOKS = "hooks"
COMMANDS = "commands"

# Build order for a full build.
CATEGORIES = (AGENTS, SKILLS, HOOKS, COMMANDS)


def group_flag_name(group: str) -> str:
    """Return the indicator variable for ``group`` (``coding`` -> ``IS_CODING_AGENT``)."""
    return f"IS_{re.sub(r'[^A-Za-z0-9]+', '_', group).upper()}_AGENT"


def path_segments(relative_path: str) -> List[str]:
    """Split a relative path on ``/`` and the platform separator."""
    normalized = relative_path.replace(os.sep, "/")
    return [part for part in normalized.split("/") if part]


def _agent_variables(item_name: str, registry: ClassificationRegistry) -> VariableSet:
    if not registry.is_classified(item_name):
        raise ClassificationError(item_name, registry=registry.location)
    agent_type = registry.category_of(item_name)

    variables: VariableSet = {
        "AGENT_NAME": item_name,
        "AGENT_TYPE": agent_type,
        "HAS_TDD": registry.is_tdd(item_name),
        "HAS_GIT_PROHIBITIONS": agent_type == CODING_GROUP,
    }
    for group in registry.groups:
        variables[group_flag_name(group)] = group == agent_type
    return variables


def _skill_variables(item_name: str, relative_path: str) -> VariableSet:
    # skills/<parent>/<name>.j2 -> parent; skills/<name>.j2 -> None
    parts = path_segments(relative_path)
    return {
        "SKILL_NAME": item_name,
        "PARENT_SKILL": parts[1] if len(parts) > 2 else None,
    }


def derive_variables(
    category: str,
    item_name: str,
    relative_path: str,
    *,
    registry: ClassificationRegistry = DEFAULT_REGISTRY,
    timestamp: Optional[str] = None,
) -> VariableSet:
    """Build the template variables for one source file.

    Args:
        category: Source category (``agents``, ``skills``, ``hooks``, ``commands``).
        item_name: File name without the template suffix.
        relative_path: Path relative to the source root, category included.
        registry: Agent classification registry.
        timestamp: Build timestamp override (default: now, UTC).

    Raises:
        ClassificationError: If ``category`` is ``agents`` and ``item_name``
            has no entry in ``registry``.
    """
    variables: VariableSet = {
        "FILENAME": item_name,
        "SOURCE_TYPE": category,
        "RELATIVE_PATH": relative_path,
        "BUILD_TIMESTAMP": timestamp or utc_timestamp(),
    }

    if category == AGENTS:
        variables.update(_agent_variables(item_name, registry))
    elif category == SKILLS:
        variables.update(_skill_variables(item_name, relative_path))
    elif category == HOOKS:
        variables["HOOK_NAME"] = item_name

    return variables


__all__ = [
    "AGENTS",
    "SKILLS",
    "HOOKS",
    "COMMANDS",
    "CATEGORIES",
    "VariableSet",
    "VariableValue",
    "derive_variables",
    "group_flag_name",
    "path_segments",
]
