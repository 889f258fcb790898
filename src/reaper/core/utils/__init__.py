"""Shared utilities for the Reaper build pipeline."""
