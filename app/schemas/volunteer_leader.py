from pydantic import BaseModel
from uuid import UUID
from typing import Optional, List
from datetime import datetime, date

from app.models.project import ProjectPriority, ProjectStatus
from app.models.volunteer_leader import VolunteerStatus, VolunteerOutcome
from app.schemas.points import PointsLedgerResponse
from app.schemas.project import ProjectResponse
from app.schemas.user import UserSummary


class ProjectSummary(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    status: ProjectStatus

    class Config:
        from_attributes = True


class VolunteerRequestResponse(BaseModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    status: VolunteerStatus
    outcome: Optional[VolunteerOutcome] = None
    points_awarded: int = 0
    notes: Optional[str] = None

    volunteered_at: datetime
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VolunteerRequestDetail(VolunteerRequestResponse):
    # Joined summaries for list endpoints
    user: Optional[UserSummary] = None
    project: Optional[ProjectSummary] = None


class RejectPayload(BaseModel):
    notes: Optional[str] = None


class CompletePayload(BaseModel):
    # Checked in the service so a bad value gets the workflow's own message
    outcome: Optional[str] = None
    notes: Optional[str] = None


class VolunteerActionResponse(BaseModel):
    message: str
    volunteer_request: VolunteerRequestResponse
    project: Optional[ProjectResponse] = None


class VolunteerDecisionResponse(BaseModel):
    message: str
    volunteer_request: VolunteerRequestResponse


class CompleteResponse(BaseModel):
    message: str
    volunteer_request: VolunteerRequestResponse
    points_record: PointsLedgerResponse


class AvailableProjectResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    priority: ProjectPriority
    status: ProjectStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    project_leader: Optional[UserSummary] = None

    has_volunteered: bool
    volunteer_status: Optional[VolunteerStatus] = None
    has_leader: bool
