"""
Authorization policies shared by every router.

Role checks are FastAPI dependencies; resource checks (team membership)
are plain functions the service layer calls with the loaded project.
"""
from fastapi import Depends

from app.core.dependencies import get_current_user
from app.core.errors import ForbiddenError
from app.models.project import Project
from app.models.user import User, UserRole


def require_role(*roles: UserRole):
    """Build a dependency that only lets the given roles through."""

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError(f"{' or '.join(r.value.title() for r in roles)} access required")
        return current_user

    return _checker


require_admin = require_role(UserRole.ADMIN)


def is_team_member(project: Project, user_id) -> bool:
    """Coder, freelancer or lead assignee on the project."""
    return (
        user_id in project.coder_ids
        or user_id in project.freelancer_ids
        or project.lead_assignee_id == user_id
    )


def ensure_team_member(project: Project, user: User) -> None:
    if not is_team_member(project, user.id):
        raise ForbiddenError("You must be part of the project team to volunteer as leader")
