"""
SQLAlchemy ORM Models

Storage shape of listings and seller-update watches. Column names mirror
the PropertyRecord / SellerUpdateCriteria field names so rows convert
directly into the pydantic models.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Integer, Numeric, Date, DateTime, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column

from src.cma.db.base import Base, TimestampMixin, VisibilityMixin


class Property(Base, TimestampMixin, VisibilityMixin):
    """
    Listing table.

    One row per MLS listing snapshot. mlg_can_view gates every read.
    """
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    listing_id: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    modification_timestamp: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Last modification in the source feed"
    )

    # Basic info
    standard_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    property_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    property_sub_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    list_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    close_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    original_list_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    # Address
    unparsed_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    subdivision: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    county_or_parish: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Structure
    bedrooms_total: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    main_level_bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms_full: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms_half: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms_total_integer: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    living_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    lot_size_square_feet: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    lot_size_acres: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 4), nullable=True)
    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    garage_parking_spaces: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_parking_spaces: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Listing details
    days_on_market: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cumulative_days_on_market: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    listing_contract_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    close_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Schools
    elementary_school: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    middle_or_junior_school: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    high_school: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    school_district: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Amenities
    flex_listing_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    pool_private_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    waterfront_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    view_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    horse_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    association_yn: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    # Terms
    property_sale_contingency: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    occupant_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    possession: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        Index("idx_properties_postal_code", "postal_code"),
        Index("idx_properties_city", "city"),
        Index("idx_properties_standard_status", "standard_status"),
        Index("idx_properties_mlg_can_view", "mlg_can_view"),
        Index("idx_properties_modification_timestamp", "modification_timestamp"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.unparsed_address})>"


class SellerUpdate(Base, TimestampMixin):
    """Saved seller-update watch (one per seller / subject property)."""
    __tablename__ = "seller_updates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Subject property label")
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(10), nullable=False)
    elementary_school: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    property_sub_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    email_frequency: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="weekly",
        comment="daily, weekly, bi-weekly or monthly"
    )
    last_sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_seller_updates_is_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<SellerUpdate(id={self.id}, postal_code={self.postal_code})>"
