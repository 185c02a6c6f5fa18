"""ticketctl - A single-user ticket tracker for the command line."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed ticketctl version."""
    return __version__
