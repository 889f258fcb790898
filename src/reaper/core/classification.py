"""Agent classification registry.

Agents are grouped into disjoint categories (coding, review, planning, ...).
Template variables such as ``AGENT_TYPE`` and the ``IS_*_AGENT`` flags are
derived from this table, so every agent template under ``agents/`` must have
an entry here.

The registry is an immutable value. ``DEFAULT_REGISTRY`` holds the shipped
table; tests and configuration can build alternates with
:meth:`ClassificationRegistry.from_mapping`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple

UNKNOWN = "unknown"

# Location reported to users when an agent is missing from the table.
REGISTRY_LOCATION = "reaper/core/classification.py"

AGENT_GROUPS: Dict[str, Tuple[str, ...]] = {
    "coding": (
        "bug-fixer",
        "feature-developer",
        "refactoring-dev",
        "integration-engineer",
    ),
    "review": ("security-auditor", "test-runner"),
    "planning": (
        "workflow-planner",
        "api-designer",
        "database-architect",
        "cloud-architect",
        "event-architect",
        "observability-architect",
        "frontend-architect",
        "data-engineer",
        "test-strategist",
        "compliance-architect",
    ),
    "operations": ("branch-manager", "deployment-engineer", "incident-responder"),
    "documentation": (
        "technical-writer",
        "claude-agent-architect",
        "ai-prompt-engineer",
        "principal-engineer",
    ),
    "performance": ("performance-engineer",),
}

# Coding agents that follow a test-driven workflow.
TDD_AGENTS: Tuple[str, ...] = ("bug-fixer", "feature-developer", "refactoring-dev")

# Group whose members carry the TDD trait and git restrictions.
CODING_GROUP = "coding"


@dataclass(frozen=True)
class ClassificationRegistry:
    """Ordered, disjoint agent groups plus the TDD subset of the coding group."""

    group_members: Tuple[Tuple[str, Tuple[str, ...]], ...]
    tdd_agents: frozenset = field(default_factory=frozenset)
    location: str = REGISTRY_LOCATION

    def __post_init__(self) -> None:
        seen: Dict[str, str] = {}
        for group, members in self.group_members:
            for name in members:
                if name in seen:
                    raise ValueError(
                        f"Agent '{name}' is listed in both '{seen[name]}' and '{group}'"
                    )
                seen[name] = group
        # Reverse index; object.__setattr__ because the dataclass is frozen.
        object.__setattr__(self, "_index", seen)

        coding = set(self.members(CODING_GROUP))
        stray = sorted(set(self.tdd_agents) - coding)
        if stray:
            raise ValueError(
                f"TDD agents must belong to the '{CODING_GROUP}' group: {', '.join(stray)}"
            )

    @classmethod
    def from_mapping(
        cls,
        groups: Mapping[str, Iterable[str]],
        tdd_agents: Iterable[str] = (),
        *,
        location: str = REGISTRY_LOCATION,
    ) -> "ClassificationRegistry":
        """Build a registry from a ``{group: [names]}`` mapping (order preserved)."""
        return cls(
            group_members=tuple((g, tuple(names)) for g, names in groups.items()),
            tdd_agents=frozenset(tdd_agents),
            location=location,
        )

    @property
    def groups(self) -> Tuple[str, ...]:
        return tuple(group for group, _ in self.group_members)

    def members(self, group: str) -> Tuple[str, ...]:
        for name, members in self.group_members:
            if name == group:
                return members
        return ()

    def category_of(self, name: str) -> str:
        """Return the group label for ``name`` or ``"unknown"``."""
        return self._index.get(name, UNKNOWN)  # type: ignore[attr-defined]

    def is_classified(self, name: str) -> bool:
        return name in self._index  # type: ignore[attr-defined]

    def is_tdd(self, name: str) -> bool:
        return name in self.tdd_agents

    def all_agents(self) -> Tuple[str, ...]:
        return tuple(name for _, members in self.group_members for name in members)


DEFAULT_REGISTRY = ClassificationRegistry.from_mapping(AGENT_GROUPS, TDD_AGENTS)


def get_agent_type(name: str) -> str:
    """Module-level convenience wrapper around ``DEFAULT_REGISTRY.category_of``."""
    return DEFAULT_REGISTRY.category_of(name)


__all__ = [
    "AGENT_GROUPS",
    "TDD_AGENTS",
    "CODING_GROUP",
    "UNKNOWN",
    "REGISTRY_LOCATION",
    "ClassificationRegistry",
    "DEFAULT_REGISTRY",
    "get_agent_type",
]
