"""
Database infrastructure for Skill Link.
"""

from .database import engine, SessionLocal, get_db, init_db, Base
from .models import *

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "init_db",
    "Base",
]
