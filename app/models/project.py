import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Date, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class ProjectPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectStatus(str, enum.Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Projects in these states can still take a volunteer leader
OPEN_PROJECT_STATUSES = (ProjectStatus.PLANNING, ProjectStatus.ACTIVE)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(ProjectPriority, name="project_priority"), nullable=False, default=ProjectPriority.MEDIUM)
    status = Column(Enum(ProjectStatus, name="project_status"), nullable=False, default=ProjectStatus.PLANNING)

    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    lead_assignee_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    # Single holder; only ever set through a conditional update on NULL
    project_leader_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    lead_assignee = relationship("User", foreign_keys=[lead_assignee_id])
    project_leader = relationship("User", foreign_keys=[project_leader_id])
    members = relationship("ProjectMember", back_populates="project", cascade="all, delete-orphan")

    @property
    def coder_ids(self):
        return [m.user_id for m in self.members if m.work_role == "CODER"]

    @property
    def freelancer_ids(self):
        return [m.user_id for m in self.members if m.work_role == "FREELANCER"]
