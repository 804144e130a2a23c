"""
Database infrastructure for the BlytzWork API.
"""

from .database import Base, Database, get_database, get_db, session_scope
from .models import *

__all__ = [
    "Base",
    "Database",
    "get_database",
    "get_db",
    "session_scope",
]
