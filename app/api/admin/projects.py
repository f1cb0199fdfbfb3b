from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.db.session import get_db
from app.core.authorization import require_admin
from app.models.project import Project, ProjectStatus
from app.models.project_members import ProjectMember
from app.models.user import User
from app.schemas.project import (
    MemberAssign,
    MemberResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter(
    prefix="/admin/projects",
    tags=["Admin - Projects"],
    dependencies=[Depends(require_admin)],
)


def _get_project_or_404(db: Session, project_id: UUID) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return project


def _ensure_user_exists(db: Session, user_id: Optional[UUID]) -> None:
    if user_id and not db.query(User).filter(User.id == user_id).first():
        raise HTTPException(status_code=404, detail="User not found")


# ==========================================
#              CORE PROJECT APIs
# ==========================================

# --- GET LIST REQUEST (With Search & Status) ---
@router.get("/", response_model=list[ProjectResponse])
def list_projects(
    db: Session = Depends(get_db),
    search: Optional[str] = None,
    project_status: Optional[ProjectStatus] = None,
    skip: int = 0,
    limit: int = 100
):
    query = db.query(Project)

    if search:
        query = query.filter(Project.title.ilike(f"%{search}%"))

    if project_status:
        query = query.filter(Project.status == project_status)

    return query.order_by(Project.created_at.desc()).offset(skip).limit(limit).all()


# --- GET SINGLE PROJECT REQUEST ---
@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: UUID, db: Session = Depends(get_db)):
    return _get_project_or_404(db, project_id)


# --- CREATE REQUEST ---
@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db)):
    if payload.start_date and payload.end_date and payload.end_date < payload.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date cannot be earlier than start date."
        )
    _ensure_user_exists(db, payload.lead_assignee_id)

    project = Project(**payload.model_dump())
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


# --- UPDATE REQUEST ---
@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: UUID,
    payload: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """
    Partial update. The project leader is not editable here; it only
    changes through the volunteer-leader workflow.
    """
    project = _get_project_or_404(db, project_id)

    changes = payload.model_dump(exclude_unset=True)
    _ensure_user_exists(db, changes.get("lead_assignee_id"))

    for key, value in changes.items():
        setattr(project, key, value)

    if project.start_date and project.end_date and project.end_date < project.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date cannot be earlier than start date."
        )

    db.commit()
    db.refresh(project)
    return project


# ==========================================
#      PROJECT MEMBERS (CODERS / FREELANCERS)
# ==========================================

# --- ASSIGN MEMBER ---
@router.post("/{project_id}/members", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def assign_member(
    project_id: UUID,
    payload: MemberAssign,
    db: Session = Depends(get_db)
):
    _get_project_or_404(db, project_id)
    _ensure_user_exists(db, payload.user_id)

    existing = db.query(ProjectMember).filter(
        ProjectMember.project_id == project_id,
        ProjectMember.user_id == payload.user_id,
        ProjectMember.work_role == payload.work_role.value,
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail=f"User is already a {payload.work_role.value.lower()} on this project")

    member = ProjectMember(
        project_id=project_id,
        user_id=payload.user_id,
        work_role=payload.work_role.value,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


# --- REMOVE MEMBER ---
@router.delete("/{project_id}/members/{user_id}")
def remove_member(
    project_id: UUID,
    user_id: UUID,
    db: Session = Depends(get_db)
):
    members = db.query(ProjectMember).filter(
        ProjectMember.project_id == project_id,
        ProjectMember.user_id == user_id
    ).all()

    if not members:
        raise HTTPException(status_code=404, detail="Member assignment not found")

    for member in members:
        db.delete(member)
    db.commit()

    return {"message": "Member removed successfully"}
