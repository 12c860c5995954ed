"""
Core components for lab administration.

Provides configuration, database, models, and notifications.
"""

from labadmin.core.config import Config, load_config
from labadmin.core.database import Database, get_database
from labadmin.core.models import CreateMode, EditMode, Lab, LabForm, Mode
from labadmin.core.notify import Notifier, NotificationLevel, create_notifier

__all__ = [
    "Config",
    "load_config",
    "Database",
    "get_database",
    "Lab",
    "LabForm",
    "Mode",
    "CreateMode",
    "EditMode",
    "Notifier",
    "NotificationLevel",
    "create_notifier",
]
