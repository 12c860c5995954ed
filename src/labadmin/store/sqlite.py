"""
SQLite lab store.

Keeps labs in a local database file. Used for standalone deployments and
tests.
"""

import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Mapping, Optional

from labadmin.core.database import Database, check_table_name, get_database
from labadmin.core.models import Lab
from labadmin.store.base import LabStore, StoreError

logger = logging.getLogger(__name__)

# OverflowError: an integer beyond SQLite's 64-bit range
_DB_ERRORS = (sqlite3.Error, OSError, OverflowError)


class SQLiteLabStore(LabStore):
    """Lab store backed by a local SQLite database."""

    def __init__(self, db_path: Path, table: str = "labs"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
            table: Name of the labs table, created on first use
        """
        super().__init__(check_table_name(table))
        self.db_path = db_path
        self._db: Optional[Database] = None

    @property
    def db(self) -> Database:
        """Database, initialized on first use."""
        if self._db is None:
            try:
                self._db = get_database(self.db_path, self.table)
            except _DB_ERRORS as e:
                raise StoreError(str(e)) from e
        return self._db

    def list_labs(self) -> list[Lab]:
        """List all labs ordered by building, then name."""
        try:
            rows = self.db.fetch_all(
                f"SELECT * FROM {self.table} ORDER BY building, name"
            )
        except _DB_ERRORS as e:
            raise StoreError(str(e)) from e
        return [Lab.from_dict(dict(row)) for row in rows]

    def insert(self, record: Mapping[str, Any]) -> Optional[Lab]:
        """Insert a lab with a freshly generated id and return the stored row."""
        self._check_fields(record)
        lab_id = str(uuid.uuid4())
        columns = ["id", *record.keys()]
        placeholders = ", ".join("?" for _ in columns)

        try:
            with self.db.connect() as conn:
                conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})",
                    (lab_id, *record.values()),
                )
                row = conn.execute(
                    f"SELECT * FROM {self.table} WHERE id = ?", (lab_id,)
                ).fetchone()
        except _DB_ERRORS as e:
            raise StoreError(str(e)) from e

        logger.debug(f"Inserted lab {lab_id}")
        return Lab.from_dict(dict(row)) if row else None

    def update(self, lab_id: str, record: Mapping[str, Any]) -> None:
        """Update the given fields of a lab."""
        self._check_fields(record)
        if not record:
            return

        updates = [f"{column} = ?" for column in record]
        updates.append("updated_at = CURRENT_TIMESTAMP")
        sql = f"UPDATE {self.table} SET {', '.join(updates)} WHERE id = ?"

        try:
            count = self.db.run(sql, (*record.values(), lab_id))
        except _DB_ERRORS as e:
            raise StoreError(str(e)) from e

        logger.debug(f"Updated lab {lab_id} ({count} row(s))")

    def delete(self, lab_id: str) -> None:
        """Delete a lab by id."""
        try:
            count = self.db.run(f"DELETE FROM {self.table} WHERE id = ?", (lab_id,))
        except _DB_ERRORS as e:
            raise StoreError(str(e)) from e

        logger.debug(f"Deleted lab {lab_id} ({count} row(s))")
