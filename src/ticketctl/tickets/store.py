"""TicketStore - In-memory owner of all tickets."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ticketctl.tickets.exceptions import StoreFormatError, ValidationError
from ticketctl.tickets.models import (
    Comment,
    DeletedTicket,
    Status,
    Ticket,
    TicketDraft,
    TicketId,
    TicketPatch,
)

logger = logging.getLogger("ticketctl.tickets")

FORMAT_VERSION = 1


class TicketStore:
    """Main API for ticket operations.

    Owns every ticket, keyed by id, and hands out ids from a counter that
    only ever grows. Lookups on unknown ids return None (or False for
    updates); they are not errors.
    """

    def __init__(self) -> None:
        self._current_id: TicketId = 0
        self._tickets: dict[TicketId, Ticket] = {}

    @property
    def current_id(self) -> TicketId:
        """The most recently issued id (0 if none)."""
        return self._current_id

    def __len__(self) -> int:
        return len(self._tickets)

    def __contains__(self, ticket_id: object) -> bool:
        return ticket_id in self._tickets

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TicketStore):
            return NotImplemented
        return self._current_id == other._current_id and self._tickets == other._tickets

    def __repr__(self) -> str:
        return f"<TicketStore(current_id={self._current_id!r}, tickets={len(self._tickets)})>"

    def _generate_id(self) -> TicketId:
        self._current_id += 1
        return self._current_id

    # --- Ticket Operations ---

    def create(self, draft: TicketDraft) -> TicketId:
        """Create a new ticket from a draft.

        Args:
            draft: Validated title and description

        Returns:
            The id of the new ticket
        """
        ticket_id = self._generate_id()
        self._tickets[ticket_id] = Ticket(
            id=ticket_id,
            title=draft.title,
            description=draft.description,
        )
        logger.debug("Created ticket %d", ticket_id)
        return ticket_id

    def get(self, ticket_id: TicketId) -> Ticket | None:
        """Get ticket by id, or None if it doesn't exist."""
        return self._tickets.get(ticket_id)

    def list(self) -> list[Ticket]:
        """List all tickets, ordered by id."""
        return [self._tickets[ticket_id] for ticket_id in sorted(self._tickets)]

    def update_ticket(self, ticket_id: TicketId, patch: TicketPatch) -> bool:
        """Apply the present fields of a patch to a ticket.

        Args:
            ticket_id: The ticket's id
            patch: Fields to replace; None fields are left untouched

        Returns:
            True if the ticket exists, False otherwise (nothing is changed)
        """
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return False
        if patch.is_empty():
            logger.debug("Ticket %d: empty patch, nothing to change", ticket_id)
            return True

        changes: dict[str, Any] = {}
        if patch.title is not None:
            changes["title"] = patch.title
        if patch.description is not None:
            changes["description"] = patch.description

        self._tickets[ticket_id] = replace(ticket, **changes)
        logger.debug("Updated ticket %d (fields: %s)", ticket_id, ", ".join(changes))
        return True

    def update_ticket_status(self, ticket_id: TicketId, status: Status) -> bool:
        """Set a ticket's status. Any status may follow any other.

        Returns:
            True if the ticket exists, False otherwise
        """
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return False

        self._tickets[ticket_id] = replace(ticket, status=status)
        logger.debug("Ticket %d: %s -> %s", ticket_id, ticket.status.value, status.value)
        return True

    def add_comment_to_ticket(self, ticket_id: TicketId, comment: Comment) -> bool:
        """Append a comment to a ticket.

        Returns:
            True if the ticket exists, False otherwise
        """
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return False

        self._tickets[ticket_id] = replace(ticket, comments=(*ticket.comments, comment))
        logger.debug("Ticket %d: added comment #%d", ticket_id, len(ticket.comments) + 1)
        return True

    def delete(self, ticket_id: TicketId) -> DeletedTicket | None:
        """Remove a ticket and hand it back to the caller.

        Returns:
            The removed ticket wrapped in DeletedTicket, or None if it didn't exist
        """
        ticket = self._tickets.pop(ticket_id, None)
        if ticket is None:
            return None
        logger.debug("Deleted ticket %d", ticket_id)
        return DeletedTicket(ticket)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": FORMAT_VERSION,
            "current_id": self._current_id,
            "tickets": [ticket.to_dict() for ticket in self.list()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TicketStore:
        """Rebuild a store from its serialized form.

        The counter is raised to the largest stored id if it lags behind, so
        ids are never handed out twice.

        Raises:
            StoreFormatError: If the data is not a valid store document.
        """
        if not isinstance(data, dict):
            raise StoreFormatError(f"Store data must be a mapping, got {type(data).__name__}")

        version = data.get("version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            raise StoreFormatError(f"Unsupported store format version: {version!r}")

        current_id = data.get("current_id", 0)
        if not isinstance(current_id, int) or isinstance(current_id, bool) or current_id < 0:
            raise StoreFormatError(f"Invalid current_id: {current_id!r}")

        records = data.get("tickets", [])
        if not isinstance(records, list):
            raise StoreFormatError("'tickets' must be a list")

        store = cls()
        for record in records:
            try:
                ticket = Ticket.from_dict(record)
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                raise StoreFormatError(f"Invalid ticket record {record!r}: {e}") from e
            if ticket.id in store._tickets:
                raise StoreFormatError(f"Duplicate ticket id: {ticket.id}")
            store._tickets[ticket.id] = ticket

        store._current_id = max([current_id, *store._tickets])
        return store
