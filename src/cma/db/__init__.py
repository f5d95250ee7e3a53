"""
Database Package

Property store persistence: models, connection management and repositories.
"""
from src.cma.db.base import Base
from src.cma.db.session import (
    engine,
    SessionLocal,
    build_engine,
    get_db_session,
    ping,
    create_all_tables,
)
from src.cma.db.models import Property, SellerUpdate
from src.cma.db.repository import (
    BaseRepository,
    PropertyRepository,
    SellerUpdateRepository,
)

__all__ = [
    # Base
    "Base",
    # Session management
    "engine",
    "SessionLocal",
    "build_engine",
    "get_db_session",
    "ping",
    "create_all_tables",
    # Models
    "Property",
    "SellerUpdate",
    # Repositories
    "BaseRepository",
    "PropertyRepository",
    "SellerUpdateRepository",
]
