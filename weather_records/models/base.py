from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for the SQLAlchemy ORM models of the local record store.

    Models inheriting from this class are registered in the shared
    metadata and created by `init_db` on startup.
    """
    pass
