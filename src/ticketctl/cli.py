"""CLI entry point for ticketctl.

Every invocation loads the store, runs exactly one command, and writes the
store back if the command changed it.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import click

from ticketctl import __version__, persistence
from ticketctl.config import ConfigError, TicketctlConfig, resolve_config
from ticketctl.logging import get_logger, setup_logging
from ticketctl.persistence import PersistenceError
from ticketctl.tickets import (
    Comment,
    Status,
    TicketDraft,
    TicketId,
    TicketPatch,
    TicketStore,
    Title,
    ValidationError,
)

logger = get_logger("cli")

TICKET_ID = click.IntRange(min=0)


@dataclass
class AppContext:
    """State shared by all commands of one invocation."""

    config: TicketctlConfig
    store_path: Path

    def open_store(self) -> TicketStore:
        return persistence.load(self.store_path)

    def save_store(self, store: TicketStore) -> None:
        try:
            persistence.save(store, self.store_path)
        except PersistenceError as e:
            logger.error("Save failed: %s", e)
            click.echo(f"Storage error: {e}", err=True)
            sys.exit(1)


pass_app = click.make_pass_decorator(AppContext)


def fail(error: ValidationError) -> NoReturn:
    """Report invalid user input and abort without touching the store."""
    logger.info("Rejected input: %s", error)
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def not_found(ticket_id: TicketId) -> None:
    click.echo(f"There was no ticket associated to the ticket id {ticket_id}.")


@click.group()
@click.version_option(version=__version__, prog_name="ticketctl")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to ticketctl.yaml (auto-detected if not specified)",
)
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the ticket store file (overrides config)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug output to stderr",
)
@click.pass_context
def main(
    ctx: click.Context, config_path: Path | None, store_path: Path | None, verbose: bool
) -> None:
    """ticketctl - track tickets from the command line."""
    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    log_dir = config.get_log_dir()
    try:
        setup_logging(
            log_dir=log_dir,
            level=config.get_log_level(),
            max_bytes=config.logging.max_bytes,
            backup_count=config.logging.backup_count,
            verbose=verbose,
        )
    except OSError as e:
        click.echo(f"Configuration error: cannot write logs to {log_dir}: {e}", err=True)
        sys.exit(1)

    store_path = store_path.resolve() if store_path is not None else config.get_store_path()
    logger.debug("Running %s against %s", ctx.invoked_subcommand, store_path)
    ctx.obj = AppContext(config=config, store_path=store_path)


@main.command()
@click.option("--title", required=True, help="Ticket title (must not be blank)")
@click.option("--description", default="", help="Free-form description")
@pass_app
def create(app: AppContext, title: str, description: str) -> None:
    """Create a new ticket."""
    try:
        draft = TicketDraft(title=Title(title), description=description)
    except ValidationError as e:
        fail(e)

    store = app.open_store()
    ticket_id = store.create(draft)
    app.save_store(store)
    logger.info("Created ticket %d", ticket_id)
    click.echo(f"Ticket {ticket_id} was created.")


@main.command()
@click.option("--ticket-id", type=TICKET_ID, required=True)
@click.option("--title", default=None, help="New title (unchanged if omitted)")
@click.option("--description", default=None, help="New description (unchanged if omitted)")
@pass_app
def edit(app: AppContext, ticket_id: TicketId, title: str | None, description: str | None) -> None:
    """Edit the title and/or description of a ticket."""
    try:
        patch = TicketPatch(
            title=Title(title) if title is not None else None,
            description=description,
        )
    except ValidationError as e:
        fail(e)

    store = app.open_store()
    if not store.update_ticket(ticket_id, patch):
        not_found(ticket_id)
        return

    app.save_store(store)
    logger.info("Updated ticket %d", ticket_id)
    click.echo(f"Ticket {ticket_id} was updated.")


@main.command()
@click.option("--ticket-id", type=TICKET_ID, required=True)
@pass_app
def delete(app: AppContext, ticket_id: TicketId) -> None:
    """Delete a ticket and print what was removed."""
    store = app.open_store()
    deleted = store.delete(ticket_id)
    if deleted is None:
        not_found(ticket_id)
        return

    app.save_store(store)
    logger.info("Deleted ticket %d", ticket_id)
    click.echo(f"The following ticket has been deleted:\n{deleted}")


@main.command(name="list")
@pass_app
def list_tickets(app: AppContext) -> None:
    """List all tickets."""
    tickets = app.open_store().list()
    if not tickets:
        click.echo("No tickets.")
        return
    click.echo("\n\n".join(ticket.render() for ticket in tickets))


@main.command()
@click.option("--ticket-id", type=TICKET_ID, required=True)
@pass_app
def show(app: AppContext, ticket_id: TicketId) -> None:
    """Show a single ticket."""
    ticket = app.open_store().get(ticket_id)
    if ticket is None:
        not_found(ticket_id)
        return
    click.echo(ticket.render())


@main.command()
@click.option("--ticket-id", type=TICKET_ID, required=True)
@click.option("--status", "status_text", required=True, help="todo, in-progress, blocked or done")
@pass_app
def move(app: AppContext, ticket_id: TicketId, status_text: str) -> None:
    """Change the status of a ticket."""
    try:
        status = Status.parse(status_text)
    except ValidationError as e:
        fail(e)

    store = app.open_store()
    if not store.update_ticket_status(ticket_id, status):
        not_found(ticket_id)
        return

    app.save_store(store)
    logger.info("Moved ticket %d to %s", ticket_id, status.value)
    click.echo(f"Status of ticket {ticket_id} was updated to {status.label}.")


@main.command()
@click.option("--ticket-id", type=TICKET_ID, required=True)
@click.option("--comment", "text", required=True, help="Comment text (must not be blank)")
@pass_app
def comment(app: AppContext, ticket_id: TicketId, text: str) -> None:
    """Add a comment to a ticket."""
    try:
        new_comment = Comment(text)
    except ValidationError as e:
        fail(e)

    store = app.open_store()
    if not store.add_comment_to_ticket(ticket_id, new_comment):
        not_found(ticket_id)
        return

    app.save_store(store)
    logger.info("Commented on ticket %d", ticket_id)
    click.echo(f"Comment has been added to ticket {ticket_id}.")


if __name__ == "__main__":
    main()
