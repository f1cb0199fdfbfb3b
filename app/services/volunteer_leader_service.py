"""
Volunteer-leader workflow.

Request lifecycle::

    pending --accept--> accepted --complete--> completed
    pending --reject--> rejected

``volunteer`` skips ``pending`` and records the request as ``accepted``
while assigning the caller as project leader.

Every write that depends on a prior read is a conditional UPDATE
(leader still unset, status still the expected one) and each operation
commits once, so a failed guard leaves nothing behind.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.authorization import ensure_team_member
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.project import Project, OPEN_PROJECT_STATUSES
from app.models.project_members import ProjectMember
from app.models.user import User
from app.models.volunteer_leader import (
    VolunteerLeaderRequest,
    VolunteerOutcome,
    VolunteerStatus,
)
from app.services import points_service

logger = logging.getLogger(__name__)

ALREADY_VOLUNTEERED = "You have already volunteered for this project"
ALREADY_LED = "Project already has a leader"
ALREADY_PROCESSED = "Request has already been processed"


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------
def _get_project(db: Session, project_id) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    return project


def _get_request(db: Session, request_id) -> VolunteerLeaderRequest:
    request = db.query(VolunteerLeaderRequest).filter(
        VolunteerLeaderRequest.id == request_id
    ).first()
    if not request:
        raise NotFoundError("Volunteer request not found")
    return request


def _claim_leadership(db: Session, project_id, user_id) -> bool:
    """Set the leader only if nobody holds it yet."""
    updated = (
        db.query(Project)
        .filter(Project.id == project_id, Project.project_leader_id.is_(None))
        .update({Project.project_leader_id: user_id}, synchronize_session=False)
    )
    return updated == 1


def _transition(db: Session, request_id, from_status, to_status, **values) -> bool:
    """Move a request between states only if it is still in ``from_status``."""
    values["status"] = to_status
    updated = (
        db.query(VolunteerLeaderRequest)
        .filter(
            VolunteerLeaderRequest.id == request_id,
            VolunteerLeaderRequest.status == from_status,
        )
        .update(values, synchronize_session=False)
    )
    return updated == 1


# ------------------------------------------------------------------
# 1. VOLUNTEER
# ------------------------------------------------------------------
def volunteer(db: Session, project_id, user: User):
    project = _get_project(db, project_id)
    ensure_team_member(project, user)

    existing = db.query(VolunteerLeaderRequest).filter(
        VolunteerLeaderRequest.project_id == project.id,
        VolunteerLeaderRequest.user_id == user.id,
    ).first()
    if existing:
        raise ConflictError(ALREADY_VOLUNTEERED)

    if not _claim_leadership(db, project.id, user.id):
        db.rollback()
        raise ConflictError(ALREADY_LED)

    request = VolunteerLeaderRequest(
        project_id=project.id,
        user_id=user.id,
        status=VolunteerStatus.ACCEPTED,
    )
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        # Unique (project, user) lost a race with a concurrent volunteer
        db.rollback()
        raise ConflictError(ALREADY_VOLUNTEERED)

    db.refresh(request)
    db.refresh(project)
    logger.info("[VOLUNTEER] User %s is now leader of project %s", user.id, project.id)
    return request, project


# ------------------------------------------------------------------
# 2. LIST
# ------------------------------------------------------------------
def list_all_requests(db: Session):
    return (
        db.query(VolunteerLeaderRequest)
        .options(
            joinedload(VolunteerLeaderRequest.user),
            joinedload(VolunteerLeaderRequest.project),
        )
        .order_by(VolunteerLeaderRequest.created_at.desc())
        .all()
    )


def list_my_requests(db: Session, user: User):
    return (
        db.query(VolunteerLeaderRequest)
        .options(joinedload(VolunteerLeaderRequest.project))
        .filter(VolunteerLeaderRequest.user_id == user.id)
        .order_by(VolunteerLeaderRequest.created_at.desc())
        .all()
    )


# ------------------------------------------------------------------
# 3. ACCEPT / REJECT
# ------------------------------------------------------------------
def accept(db: Session, request_id):
    request = _get_request(db, request_id)
    if request.status != VolunteerStatus.PENDING:
        raise ConflictError(ALREADY_PROCESSED)

    project = _get_project(db, request.project_id)
    if project.project_leader_id is not None or not _claim_leadership(db, project.id, request.user_id):
        db.rollback()
        raise ConflictError(ALREADY_LED)

    if not _transition(db, request.id, VolunteerStatus.PENDING, VolunteerStatus.ACCEPTED):
        db.rollback()
        raise ConflictError(ALREADY_PROCESSED)

    db.commit()
    db.refresh(request)
    db.refresh(project)
    logger.info("[VOLUNTEER] Accepted request %s for project %s", request.id, project.id)
    return request, project


def reject(db: Session, request_id, notes=None):
    request = _get_request(db, request_id)
    if request.status != VolunteerStatus.PENDING:
        raise ConflictError(ALREADY_PROCESSED)

    if not _transition(db, request.id, VolunteerStatus.PENDING, VolunteerStatus.REJECTED, notes=notes):
        db.rollback()
        raise ConflictError(ALREADY_PROCESSED)

    db.commit()
    db.refresh(request)
    logger.info("[VOLUNTEER] Rejected request %s", request.id)
    return request


# ------------------------------------------------------------------
# 4. COMPLETE (award or deduct 2x points)
# ------------------------------------------------------------------
def complete(db: Session, request_id, outcome, notes=None):
    """
    Record the leader's outcome and move points.

    Returns ``(message, request, ledger)``.
    """
    if outcome not in {o.value for o in VolunteerOutcome}:
        raise ValidationError("Valid outcome required (success or failure)")
    outcome = VolunteerOutcome(outcome)

    request = _get_request(db, request_id)
    if request.status != VolunteerStatus.ACCEPTED:
        raise ConflictError("Request must be accepted first")

    project = _get_project(db, request.project_id)
    points = points_service.leader_points(project.priority, outcome)

    try:
        moved = _transition(
            db,
            request.id,
            VolunteerStatus.ACCEPTED,
            VolunteerStatus.COMPLETED,
            outcome=outcome,
            points_awarded=points,
            completed_at=datetime.now(timezone.utc),
            notes=notes,
        )
        if not moved:
            raise ConflictError("Request must be accepted first")

        metadata = {"project_id": str(project.id)}
        if outcome == VolunteerOutcome.FAILURE:
            metadata["penalty_reason"] = "Project failed as volunteer leader"

        ledger = points_service.award_points(
            db,
            user_id=request.user_id,
            points=points,
            activity_type="project_completion" if outcome == VolunteerOutcome.SUCCESS else "penalty",
            description=f"Volunteer Leader - {project.title} ({outcome.value})",
            metadata=metadata,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(request)
    db.refresh(ledger)

    verb = "Points awarded" if points > 0 else "Points deducted"
    message = f"Project outcome recorded. {verb}: {abs(points)}"
    logger.info("[VOLUNTEER] Completed request %s with %s (%+d)", request.id, outcome.value, points)
    return message, request, ledger


# ------------------------------------------------------------------
# 5. AVAILABLE PROJECTS
# ------------------------------------------------------------------
def list_available_projects(db: Session, user: User):
    """
    Open projects where the user is on the team, annotated with the
    user's volunteer status and whether someone already leads it.
    """
    member_project_ids = select(ProjectMember.project_id).where(
        ProjectMember.user_id == user.id
    )

    projects = (
        db.query(Project)
        .options(joinedload(Project.project_leader))
        .filter(
            Project.status.in_(OPEN_PROJECT_STATUSES),
            or_(
                Project.id.in_(member_project_ids),
                Project.lead_assignee_id == user.id,
            ),
        )
        .order_by(Project.created_at.desc())
        .all()
    )

    my_requests = {}
    if projects:
        rows = db.query(VolunteerLeaderRequest).filter(
            VolunteerLeaderRequest.user_id == user.id,
            VolunteerLeaderRequest.project_id.in_([p.id for p in projects]),
        ).all()
        my_requests = {r.project_id: r for r in rows}

    result = []
    for project in projects:
        request = my_requests.get(project.id)
        result.append({
            "id": project.id,
            "title": project.title,
            "description": project.description,
            "priority": project.priority,
            "status": project.status,
            "start_date": project.start_date,
            "end_date": project.end_date,
            "project_leader": project.project_leader,
            "has_volunteered": request is not None,
            "volunteer_status": request.status if request else None,
            "has_leader": project.project_leader_id is not None,
        })
    return result


# ------------------------------------------------------------------
# 6. MY POINTS
# ------------------------------------------------------------------
def get_my_points(db: Session, user: User):
    ledger = points_service.get_ledger(db, user.id)
    if ledger is None:
        return {
            "id": None,
            "user_id": user.id,
            "total_points": 0,
            "monthly_points": 0,
            "transactions": [],
        }
    return ledger
