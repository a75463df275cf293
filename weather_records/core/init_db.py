from weather_records.core.db import engine
from weather_records.models import Base


async def init_db() -> None:
    """
    Initialize the storage schema.

    Creates the `storage_slots` table if it does not already exist. The
    record collection itself is written lazily on the first save.
    """
    async with engine.begin() as conn:
        # Run the synchronous SQLAlchemy `create_all` operation
        # inside an asynchronous context.
        await conn.run_sync(Base.metadata.create_all)
