"""Models for manpage-cli."""
