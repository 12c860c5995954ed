"""
SQLite storage for the local lab store.

Creates the labs table on first use and hands out short-lived connections.
The table name is configurable, so it is validated before being put into
any statement.
"""

import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

LABS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id TEXT PRIMARY KEY,  -- uuid4, assigned on insert
    name TEXT NOT NULL,
    building TEXT NOT NULL,
    capacity INTEGER NOT NULL DEFAULT 30,
    has_projector INTEGER NOT NULL DEFAULT 1,
    has_ac INTEGER NOT NULL DEFAULT 1,
    is_available INTEGER DEFAULT 1,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_{table}_building_name ON {table}(building, name);
"""


def check_table_name(table: str) -> str:
    """Return table unchanged, or raise ValueError if it is not a plain identifier."""
    if not TABLE_NAME.match(table):
        raise ValueError(f"Invalid table name: {table!r}")
    return table


class Database:
    """One SQLite file holding a labs table."""

    def __init__(self, db_path: Path, table: str = "labs"):
        """
        Args:
            db_path: Path to SQLite database file
            table: Name of the labs table
        """
        self.db_path = db_path
        self.table = check_table_name(table)

    def initialize(self) -> None:
        """Create the database file and labs table if they do not exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.connect() as conn:
            conn.executescript(LABS_TABLE_SQL.format(table=self.table))

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Open a connection for one unit of work.

        Commits when the block exits normally and rolls back if it raises.

        Yields:
            SQLite connection with row factory set to sqlite3.Row
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self.connect() as conn:
            return conn.execute(sql, params).fetchall()

    def fetch_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        with self.connect() as conn:
            return conn.execute(sql, params).fetchone()

    def run(self, sql: str, params: tuple = ()) -> int:
        """Run an UPDATE or DELETE and return the number of rows it touched."""
        with self.connect() as conn:
            return conn.execute(sql, params).rowcount


def get_database(db_path: Path, table: str = "labs") -> Database:
    """
    Get a database with its labs table in place.

    Args:
        db_path: Path to database file
        table: Name of the labs table

    Returns:
        Initialized Database instance
    """
    db = Database(db_path, table)
    db.initialize()
    return db
