"""Shared helpers for the Reaper test suite."""
