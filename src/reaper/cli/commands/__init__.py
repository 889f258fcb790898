"""Top-level Reaper commands (auto-discovered by the dispatcher)."""
