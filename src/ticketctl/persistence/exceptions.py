"""Custom exceptions for the persistence layer."""


class PersistenceError(Exception):
    """Store file could not be written."""
