"""
Database module initialization.
Exports database components for use throughout the application.
"""

from friendsbets.database.base import Base
from friendsbets.database.dependencies import get_database, get_db
from friendsbets.database.retry import is_transient, run_with_retry
from friendsbets.database.session import Database

__all__ = [
    # Connection management
    "Database",
    # Dependencies
    "get_database",
    "get_db",
    # Base classes
    "Base",
    # Utilities
    "is_transient",
    "run_with_retry",
]
