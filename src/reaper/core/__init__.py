"""Core build pipeline for Reaper."""
