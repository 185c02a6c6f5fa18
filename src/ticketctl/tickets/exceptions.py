"""Custom exceptions for the ticket core."""


class TicketError(Exception):
    """Base exception for ticket errors."""


class ValidationError(TicketError):
    """Raw user input could not be turned into a valid value."""


class EmptyTitleError(ValidationError):
    """Title is empty after trimming whitespace."""


class EmptyCommentError(ValidationError):
    """Comment is empty after trimming whitespace."""


class InvalidStatusTextError(ValidationError):
    """Text does not name a known status."""


class StoreFormatError(TicketError):
    """Serialized store data is malformed."""
