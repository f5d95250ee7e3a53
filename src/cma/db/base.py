"""
SQLAlchemy Base and Mixins

Declarative base plus the column groups shared by listing-store tables.
"""
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all database models."""

    id: Any


class TimestampMixin:
    """
    Row bookkeeping timestamps.

    created_at also orders store scans, so iteration follows insertion.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp when record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="Timestamp when record was last updated"
    )


class VisibilityMixin:
    """
    MLS display permission.

    Rows with mlg_can_view False stay stored but are never returned by a
    visible-only query.
    """

    mlg_can_view: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="MLS visibility flag - False hides the listing"
    )


def import_all_models():
    """
    Import all models to register them with SQLAlchemy Base.

    Call before create_all() so every table is discovered.
    """
    from src.cma.db import models  # noqa: F401
