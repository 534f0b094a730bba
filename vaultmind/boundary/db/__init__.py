"""
Database boundary.

Async SQLAlchemy persistence for vault sources and summary notes.

Dependencies: sqlalchemy
System role: Persistence adapter
"""

from vaultmind.boundary.db.base import Base
from vaultmind.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
]
