"""Core CLI helpers."""
