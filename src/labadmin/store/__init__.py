"""
Lab store module for lab administration.

Provides the labs query client for local SQLite and hosted REST backends.
"""

from labadmin.store.base import LabStore, StoreError, get_store

__all__ = [
    "LabStore",
    "StoreError",
    "get_store",
]
