"""
Property Stores

Read access to the listing inventory, in memory or through SQLAlchemy.
"""
from src.cma.store.base import PropertyStore
from src.cma.store.memory import InMemoryPropertyStore
from src.cma.store.database import SqlAlchemyPropertyStore, row_to_record

__all__ = [
    "PropertyStore",
    "InMemoryPropertyStore",
    "SqlAlchemyPropertyStore",
    "row_to_record",
]
