"""
SQLAlchemy declarative base and shared columns.

Every row carries a UUID key and UTC timestamps; every vault-owned row
also carries the vault partition key.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; importing a model registers its table on Base.metadata."""


class RecordMixin:
    """
    UUID primary key plus creation and modification timestamps.

    Uuid(as_uuid=True) is dialect-neutral, so the same models run on
    SQLite (tests, local use) and PostgreSQL.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )


class VaultScopedMixin:
    """Indexed vault partition key."""

    vault_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        doc="Owning vault",
    )
