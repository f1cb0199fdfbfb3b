import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Text, DateTime, Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class VolunteerStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class VolunteerOutcome(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def _utcnow():
    return datetime.now(timezone.utc)


class VolunteerLeaderRequest(Base):
    __tablename__ = "volunteer_leader_requests"
    # One volunteer request per user per project
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_volunteer_leader_project_user"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    project_id = Column(Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    status = Column(
        Enum(VolunteerStatus, name="volunteer_status"),
        nullable=False,
        default=VolunteerStatus.PENDING,
    )
    outcome = Column(Enum(VolunteerOutcome, name="volunteer_outcome"), nullable=True)
    points_awarded = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    volunteered_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    project = relationship("Project")
