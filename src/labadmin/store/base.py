"""
Base classes for lab stores.

Defines the query client interface the admin view talks to and a factory
for the configured backend.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping, Optional

from labadmin.core.models import WRITABLE_FIELDS, Lab

if TYPE_CHECKING:
    from labadmin.core.config import Config


class StoreError(Exception):
    """A store call failed. Carries a human-readable message only."""


class LabStore(ABC):
    """Abstract query client for the labs collection."""

    def __init__(self, table: str = "labs"):
        """
        Initialize store.

        Args:
            table: Name of the labs collection
        """
        self.table = table

    @abstractmethod
    def list_labs(self) -> list[Lab]:
        """
        List all labs ordered by building, then name.

        Raises:
            StoreError: If the query fails
        """
        pass

    @abstractmethod
    def insert(self, record: Mapping[str, Any]) -> Optional[Lab]:
        """
        Insert a lab. The store assigns its id.

        Returns:
            Created Lab, or None if the backend returned no representation

        Raises:
            StoreError: If the insert fails
        """
        pass

    @abstractmethod
    def update(self, lab_id: str, record: Mapping[str, Any]) -> None:
        """
        Update the given fields of a lab.

        Raises:
            StoreError: If the update fails
        """
        pass

    @abstractmethod
    def delete(self, lab_id: str) -> None:
        """
        Delete a lab by id.

        Raises:
            StoreError: If the delete fails
        """
        pass

    def _check_fields(self, record: Mapping[str, Any]) -> None:
        """Reject fields the labs collection does not accept."""
        unknown = sorted(set(record) - set(WRITABLE_FIELDS))
        if unknown:
            raise StoreError(f"Unknown lab fields: {', '.join(unknown)}")


def get_store(config: "Config") -> LabStore:
    """
    Factory function to create the configured lab store.

    Args:
        config: Loaded configuration

    Returns:
        LabStore subclass instance

    Raises:
        ValueError: If the configured backend is not supported
    """
    backend = config.store.backend.lower()

    if backend == "sqlite":
        from labadmin.store.sqlite import SQLiteLabStore
        return SQLiteLabStore(config.database_path, table=config.store.table)

    elif backend == "rest":
        from labadmin.store.rest import RestLabStore
        return RestLabStore(
            url=config.store.url,
            api_key=config.store.api_key,
            table=config.store.table,
            timeout=config.store.timeout,
        )

    else:
        raise ValueError(f"Unsupported store backend: {config.store.backend}")
