"""Value types and the Ticket entity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ticketctl.tickets.exceptions import (
    EmptyCommentError,
    EmptyTitleError,
    InvalidStatusTextError,
)

TicketId = int


@dataclass(frozen=True)
class Title:
    """A ticket title. Never blank."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Title must be a string, got {type(self.value).__name__}")
        if not self.value.strip():
            raise EmptyTitleError("Title cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Comment:
    """A comment attached to a ticket. Never blank."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Comment must be a string, got {type(self.value).__name__}")
        if not self.value.strip():
            raise EmptyCommentError("Comment cannot be empty")

    def __str__(self) -> str:
        return self.value


class Status(StrEnum):
    """Ticket status enum.

    Any status may be set from any other; there is no enforced workflow.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DONE = "done"

    @property
    def label(self) -> str:
        """Display name, e.g. 'InProgress'."""
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, text: str) -> Status:
        """Parse user-supplied status text.

        Matching is case-insensitive and ignores surrounding whitespace.

        Args:
            text: One of todo, to-do, inprogress, in-progress, blocked, done.

        Returns:
            The matching Status.

        Raises:
            InvalidStatusTextError: If the text names no known status.
        """
        try:
            return _STATUS_ALIASES[text.strip().lower()]
        except KeyError:
            raise InvalidStatusTextError(
                f"Invalid status {text!r}. Valid values: todo, in-progress, blocked and done."
            ) from None


_STATUS_LABELS = {
    Status.TODO: "ToDo",
    Status.IN_PROGRESS: "InProgress",
    Status.BLOCKED: "Blocked",
    Status.DONE: "Done",
}

_STATUS_ALIASES = {
    "todo": Status.TODO,
    "to-do": Status.TODO,
    "inprogress": Status.IN_PROGRESS,
    "in-progress": Status.IN_PROGRESS,
    "blocked": Status.BLOCKED,
    "done": Status.DONE,
}


@dataclass(frozen=True)
class TicketDraft:
    """Input for creating a ticket."""

    title: Title
    description: str = ""


@dataclass(frozen=True)
class TicketPatch:
    """Partial update for a ticket.

    A field left as None keeps its current value. An empty description
    replaces (clears) the current one.
    """

    title: Title | None = None
    description: str | None = None

    def is_empty(self) -> bool:
        """Whether the patch would change nothing."""
        return self.title is None and self.description is None


@dataclass(frozen=True)
class Ticket:
    """A stored ticket.

    Records are immutable; the store swaps in a new record on every change.
    """

    id: TicketId
    title: Title
    description: str
    status: Status = Status.TODO
    comments: tuple[Comment, ...] = ()

    def render(self) -> str:
        """Human-readable, multi-line rendering of the ticket."""
        lines = [
            "Ticket:",
            f"\tId:{self.id}",
            f"\tTitle:{self.title}",
            f"\tDescription:{self.description}",
            f"\tStatus:{self.status.label}",
            "\tComments:",
        ]
        lines.extend(f"\t- {comment}" for comment in self.comments)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title.value,
            "description": self.description,
            "status": self.status.value,
            "comments": [comment.value for comment in self.comments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Ticket:
        """Create from dictionary.

        Title and comments are validated again, so a hand-edited file cannot
        smuggle in blank values.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the id or status is invalid.
            TypeError: If a field has the wrong type.
            ValidationError: If the title or a comment is blank.
        """
        ticket_id = data["id"]
        if not isinstance(ticket_id, int) or isinstance(ticket_id, bool) or ticket_id < 1:
            raise ValueError(f"Invalid ticket id: {ticket_id!r}")
        description = data.get("description", "")
        if not isinstance(description, str):
            raise TypeError(f"Description must be a string, got {type(description).__name__}")
        comments = data.get("comments", [])
        if not isinstance(comments, list):
            raise TypeError(f"Comments must be a list, got {type(comments).__name__}")
        return cls(
            id=ticket_id,
            title=Title(data["title"]),
            description=description,
            status=Status(data.get("status", Status.TODO.value)),
            comments=tuple(Comment(text) for text in comments),
        )


@dataclass(frozen=True)
class DeletedTicket:
    """A ticket that has been removed from the store."""

    ticket: Ticket

    @property
    def id(self) -> TicketId:
        return self.ticket.id

    def __str__(self) -> str:
        return self.ticket.render()
