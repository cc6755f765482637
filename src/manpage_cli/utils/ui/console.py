"""Console utilities for manpage-cli."""

from rich.console import Console


def get_console(stderr: bool = False, color: bool = True) -> Console:
    """Get a Rich Console for one stream.

    Soft wrapping keeps long paths on a single line so they can be copied
    and grepped.
    """
    return Console(
        stderr=stderr,
        highlight=False,
        soft_wrap=True,
        no_color=not color,
    )
