from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from outlet_admin.database import Base


class OutboxEvent(Base):
    __tablename__ = "outbox_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(String, nullable=False)  # e.g. "booking_created"
    payload = Column(JSON, nullable=False)
    status = Column(String, default="PENDING", nullable=False)  # PENDING, PROCESSED
    created_at = Column(DateTime, server_default=func.now())
