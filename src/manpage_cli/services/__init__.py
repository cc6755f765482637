"""Services for manpage-cli."""
