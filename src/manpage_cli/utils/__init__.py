"""Utility helpers for manpage-cli."""
