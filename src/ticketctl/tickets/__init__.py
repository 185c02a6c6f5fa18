"""Tickets - Validated value types, the Ticket entity and the in-memory store."""

from ticketctl.tickets.exceptions import (
    EmptyCommentError,
    EmptyTitleError,
    InvalidStatusTextError,
    StoreFormatError,
    TicketError,
    ValidationError,
)
from ticketctl.tickets.models import (
    Comment,
    DeletedTicket,
    Status,
    Ticket,
    TicketDraft,
    TicketId,
    TicketPatch,
    Title,
)
from ticketctl.tickets.store import TicketStore

__all__ = [
    "Comment",
    "DeletedTicket",
    "EmptyCommentError",
    "EmptyTitleError",
    "InvalidStatusTextError",
    "Status",
    "StoreFormatError",
    "Ticket",
    "TicketDraft",
    "TicketError",
    "TicketId",
    "TicketPatch",
    "TicketStore",
    "Title",
    "ValidationError",
]
