from .base import Base
from .session import engine, async_session_factory, get_db_session, create_tables
from .data_service import SQLAlchemyDataService

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "create_tables",
    "SQLAlchemyDataService",
]
