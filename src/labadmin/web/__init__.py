"""
Web interface for lab administration.

Provides the lab management screen and a REST API over the lab store.
"""

from labadmin.web.app import create_app

__all__ = ["create_app"]
