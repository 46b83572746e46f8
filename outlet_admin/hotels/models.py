import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship

from outlet_admin.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


room_amenities = Table(
    "room_amenities",
    Base.metadata,
    Column("room_id", ForeignKey("rooms.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "room_categories"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)


class Amenity(Base):
    __tablename__ = "amenities"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)
    icon = Column(String, nullable=True)


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    room_number = Column(String, nullable=False)
    category_id = Column(ForeignKey("room_categories.id"), nullable=True)
    price = Column(Float, nullable=False)
    capacity = Column(Integer, nullable=False)

    # Housekeeping flag (available, occupied, maintenance), independent of booked dates
    status = Column(String, default="available", nullable=False)
    description = Column(Text, default="", nullable=False)
    maintenance_note = Column(Text, nullable=True)

    amenities = relationship(Amenity, secondary=room_amenities, lazy="selectin")


class Booking(Base):
    __tablename__ = "room_bookings"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    room_id = Column(ForeignKey("rooms.id"), nullable=False)

    guest_name = Column(String, nullable=False)
    phone = Column(String, default="", nullable=False)
    id_proof = Column(String, default="", nullable=False)
    guest_count = Column(Integer, default=1, nullable=False)

    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)

    # pending, confirmed, checked-in, completed, cancelled
    status = Column(String, default="confirmed", nullable=False)
    total_price = Column(Float, default=0, nullable=False)
    advance_payment = Column(Float, default=0, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    folio_charges = relationship(
        "FolioCharge",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="FolioCharge.created_at",
    )

    __table_args__ = (
        Index("idx_room_booking_range", room_id, status, check_in, check_out),
    )


class FolioCharge(Base):
    __tablename__ = "folio_charges"

    id = Column(String, primary_key=True, default=new_id)
    booking_id = Column(ForeignKey("room_bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # room-service, laundry, other
    type = Column(String, nullable=False)
    item = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    is_express = Column(Boolean, default=False, nullable=False)
    total = Column(Float, nullable=False)
