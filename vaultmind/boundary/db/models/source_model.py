"""
Source ORM model.

A file uploaded into a vault. The ingestion and note pipelines read
sources by vault; upload handling and storage live elsewhere.

Dependencies: sqlalchemy, vaultmind.boundary.db.base
System role: Source persistence for vault ingestion
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from vaultmind.boundary.db.base import Base, RecordMixin, VaultScopedMixin


class SourceModel(Base, RecordMixin, VaultScopedMixin):
    """
    Source ORM model.

    Attributes:
        name: Original file name, shown as the chunk source reference
        url: Path of the stored file
    """

    __tablename__ = "sources"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original file name",
    )

    url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Stored file path",
    )
