"""Commands for manpage-cli."""
