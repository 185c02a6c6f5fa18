"""Persistence - Loads and saves the ticket store as a single JSON file."""

from ticketctl.persistence.exceptions import PersistenceError
from ticketctl.persistence.file_store import CORRUPT_SUFFIX, load, save

__all__ = [
    "CORRUPT_SUFFIX",
    "PersistenceError",
    "load",
    "save",
]
