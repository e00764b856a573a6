"""SQLAlchemy models for locally persisted client state."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from photosearch.db.base import Base
from photosearch.utils.datetime import utc_now


class KeyValueEntry(Base):
    __tablename__ = "key_value_entries"
    __table_args__ = (UniqueConstraint("key", name="uq_key_value_entries_key"),)

    key: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[list | None] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


__all__ = ["KeyValueEntry"]
