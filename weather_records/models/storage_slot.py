from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from weather_records.models.base import Base


class StorageSlot(Base):
    """
    Named storage slot.

    A slot holds one serialized document and is always overwritten as a
    whole. The weather record collection lives in a single slot (by default
    `weatherRecords`) as a JSON array.
    """

    __tablename__ = "storage_slots"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    name: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Slot name",
    )

    payload: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Serialized document stored in the slot",
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of the last overwrite (UTC)",
    )
