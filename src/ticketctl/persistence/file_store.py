"""Whole-file JSON persistence for the ticket store.

The store is read once at startup and written back in full at shutdown.
Writes go to a sibling temp file first and then replace the target, so the
previous file stays intact until the new one is complete.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from ticketctl.persistence.exceptions import PersistenceError
from ticketctl.tickets import StoreFormatError, TicketStore

logger = logging.getLogger("ticketctl.persistence")

CORRUPT_SUFFIX = ".corrupt"


def load(path: Path | str) -> TicketStore:
    """Load the store from a file.

    Args:
        path: Path to the JSON store file.

    Returns:
        The loaded store, or an empty one if the file doesn't exist or can't
        be read. An unreadable file is moved aside to a fresh ``.corrupt``
        backup so the next save doesn't destroy it.
    """
    path = Path(path)

    if not path.exists():
        logger.info("No store file at %s, starting with an empty store", path)
        return TicketStore()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        store = TicketStore.from_dict(data)
    # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized ints
    except (OSError, ValueError, RecursionError, StoreFormatError) as e:
        logger.warning("Could not read store file %s: %s", path, e)
        _quarantine(path)
        return TicketStore()

    logger.debug("Loaded %d tickets from %s", len(store), path)
    return store


def save(store: TicketStore, path: Path | str) -> None:
    """Save the store to a file, replacing any previous content.

    Args:
        store: The store to serialize.
        path: Path to the JSON store file.

    Raises:
        PersistenceError: If the file can't be written.
    """
    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(store.to_dict(), f, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise PersistenceError(f"Could not write store file {path}: {e}") from e

    logger.debug("Saved %d tickets to %s", len(store), path)


def _quarantine(path: Path) -> None:
    """Move an unreadable store file out of the way.

    Earlier backups are never overwritten: the first goes to
    ``<name>.corrupt``, later ones to ``<name>.corrupt.1``, ``.corrupt.2``...
    """
    target = _corrupt_target(path)
    try:
        os.replace(path, target)
    except OSError as e:
        logger.warning("Could not move %s aside: %s", path, e)
        return
    logger.warning("Moved unreadable store file to %s", target)


def _corrupt_target(path: Path) -> Path:
    target = path.with_name(path.name + CORRUPT_SUFFIX)
    counter = 0
    while target.exists():
        counter += 1
        target = path.with_name(f"{path.name}{CORRUPT_SUFFIX}.{counter}")
    return target
