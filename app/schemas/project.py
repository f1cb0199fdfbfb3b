# app/schemas/project.py
from pydantic import BaseModel
from uuid import UUID
from typing import Optional, List
from datetime import datetime, date

from app.models.project import ProjectPriority, ProjectStatus
from app.models.project_members import WorkRole


class ProjectCreate(BaseModel):
    title: str
    description: Optional[str] = None
    priority: ProjectPriority = ProjectPriority.MEDIUM
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    lead_assignee_id: Optional[UUID] = None


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[ProjectPriority] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    lead_assignee_id: Optional[UUID] = None


class ProjectResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    priority: ProjectPriority
    status: ProjectStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    lead_assignee_id: Optional[UUID] = None
    project_leader_id: Optional[UUID] = None
    coder_ids: List[UUID] = []
    freelancer_ids: List[UUID] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MemberAssign(BaseModel):
    user_id: UUID
    work_role: WorkRole


class MemberResponse(BaseModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    work_role: WorkRole

    class Config:
        from_attributes = True
