"""
Reaper - template build pipeline for agent, skill, hook and command prompts.

Renders Jinja2 source fragments into a mirrored tree of markdown artifacts,
preserving frontmatter and deriving per-file template variables from the
agent classification registry.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
