from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from schooldb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageBlob(Base):
    """
    One named namespace of persisted state.

    `payload` is the JSON text of the whole collection; it is read
    permissively and always rewritten as a unit.
    """

    __tablename__ = "storage_blobs"

    key = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<StorageBlob key={self.key} bytes={len(self.payload or '')}>"
