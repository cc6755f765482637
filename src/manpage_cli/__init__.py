"""Generate and install UNIX man pages from README files."""

__version__ = "1.0.0"
