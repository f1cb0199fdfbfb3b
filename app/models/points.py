import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class PointsLedger(Base):
    __tablename__ = "points_ledgers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True)

    # Only ever changed through in-database increments
    total_points = Column(Integer, nullable=False, default=0)
    monthly_points = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    transactions = relationship(
        "PointsTransaction",
        back_populates="ledger",
        order_by="PointsTransaction.id",
    )


class PointsTransaction(Base):
    """Append-only; rows are never updated or deleted."""

    __tablename__ = "points_transactions"

    # Integer key keeps insertion order inside a ledger
    id = Column(Integer, primary_key=True, autoincrement=True)
    ledger_id = Column(Uuid(as_uuid=True), ForeignKey("points_ledgers.id"), nullable=False, index=True)

    activity_type = Column(String, nullable=False)
    points = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    ledger = relationship("PointsLedger", back_populates="transactions")
