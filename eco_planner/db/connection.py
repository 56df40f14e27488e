"""
SQLite connection management.

``get_connection()`` yields a configured connection:
  - foreign keys ON (plan actions cascade with their plan),
  - WAL journal mode so CLI reads do not block plan writes,
  - busy timeout for lock contention between concurrent plan requests,
  - ``sqlite3.Row`` factory so rows behave like dicts,
  - commit on clean exit, rollback on exception.

``immediate_transaction()`` opens a ``BEGIN IMMEDIATE`` block on an existing
connection. The write lock is taken up front, so a read-then-replace sequence
(plan regeneration) cannot interleave with another writer.

Usage::

    from eco_planner.db.connection import get_connection

    with get_connection("data/db/eco_planner.db") as conn:
        ActionRepository(conn).seed_if_empty(DEFAULT_ACTIONS)
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

logger = logging.getLogger(__name__)


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Generator[sqlite3.Connection, None, None]:
    """Yield an open, configured ``sqlite3.Connection``.

    Parent directories of ``db_path`` are created on first use.

    Args:
        db_path: SQLite file path, or ``":memory:"`` in tests.
        wal_mode: Enable WAL journal mode.
        busy_timeout_ms: Wait this long on a locked database before
            ``OperationalError``.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened or is locked.
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row

    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms};")
        if wal_mode:
            conn.execute("PRAGMA journal_mode = WAL;")

        yield conn
        conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()


@contextmanager
def immediate_transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    """Run the block inside ``BEGIN IMMEDIATE`` … ``COMMIT``.

    If ``conn`` is already inside a transaction (e.g. the caller is batching
    writes), the block joins it and the caller keeps ownership of the commit.

    Raises:
        sqlite3.OperationalError: If the write lock is not granted within the
            connection's busy timeout.
    """
    if conn.in_transaction:
        yield conn
        return

    conn.execute("BEGIN IMMEDIATE;")
    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    conn.commit()
