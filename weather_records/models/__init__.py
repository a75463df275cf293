from weather_records.models.base import Base
from weather_records.models.storage_slot import StorageSlot

__all__ = ["Base", "StorageSlot"]
