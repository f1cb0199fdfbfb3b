import uuid
import enum
from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class WorkRole(str, enum.Enum):
    CODER = "CODER"
    FREELANCER = "FREELANCER"


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", "work_role", name="uq_project_member_role"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    project_id = Column(Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Stored as plain string; must be one of WorkRole values
    work_role = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User")
    project = relationship("Project", back_populates="members")
