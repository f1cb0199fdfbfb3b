from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
from typing import List, Optional

from app.db.session import get_db
from app.core.authorization import require_admin
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.points import PointsLedgerResponse
from app.schemas.volunteer_leader import (
    AvailableProjectResponse,
    CompletePayload,
    CompleteResponse,
    RejectPayload,
    VolunteerActionResponse,
    VolunteerDecisionResponse,
    VolunteerRequestDetail,
)
from app.services import volunteer_leader_service as service

router = APIRouter(
    prefix="/volunteer-leader",
    tags=["Volunteer Leader"]
)


# ------------------------------------------------------------------
# 1. VOLUNTEER (Employee)
# ------------------------------------------------------------------
@router.post(
    "/volunteer/{project_id}",
    response_model=VolunteerActionResponse,
    status_code=status.HTTP_201_CREATED,
)
def volunteer_for_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Volunteer to lead a project you are on the team of.
    You become the leader immediately; the request is recorded as accepted.
    """
    request, project = service.volunteer(db, project_id, current_user)
    return {
        "message": "You are now the leader of this project!",
        "volunteer_request": request,
        "project": project,
    }


# ------------------------------------------------------------------
# 2. LIST REQUESTS
# ------------------------------------------------------------------
@router.get("/requests", response_model=List[VolunteerRequestDetail])
def list_all_requests(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return service.list_all_requests(db)


@router.get("/my-requests", response_model=List[VolunteerRequestDetail])
def list_my_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return service.list_my_requests(db, current_user)


# ------------------------------------------------------------------
# 3. ADMIN DECISIONS
# ------------------------------------------------------------------
@router.put("/accept/{request_id}", response_model=VolunteerActionResponse)
def accept_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    request, project = service.accept(db, request_id)
    return {
        "message": "Volunteer request accepted",
        "volunteer_request": request,
        "project": project,
    }


@router.put("/reject/{request_id}", response_model=VolunteerDecisionResponse)
def reject_request(
    request_id: UUID,
    payload: Optional[RejectPayload] = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    request = service.reject(db, request_id, payload.notes if payload else None)
    return {
        "message": "Volunteer request rejected",
        "volunteer_request": request,
    }


@router.put("/complete/{request_id}", response_model=CompleteResponse)
def complete_request(
    request_id: UUID,
    payload: Optional[CompletePayload] = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """
    Record the project outcome and award (success) or deduct (failure)
    2x the priority's base points.
    """
    message, request, ledger = service.complete(
        db,
        request_id,
        payload.outcome if payload else None,
        payload.notes if payload else None,
    )
    return {
        "message": message,
        "volunteer_request": request,
        "points_record": ledger,
    }


# ------------------------------------------------------------------
# 4. EMPLOYEE VIEWS
# ------------------------------------------------------------------
@router.get("/available-projects", response_model=List[AvailableProjectResponse])
def list_available_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return service.list_available_projects(db, current_user)


@router.get("/my-points", response_model=PointsLedgerResponse)
def get_my_points(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return service.get_my_points(db, current_user)
