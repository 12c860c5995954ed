"""
Lab Administration (labadmin).

Admin screen for managing physical lab rooms: name, building, capacity,
facilities and availability, persisted in a relational store.
"""

__version__ = "0.1.0"
