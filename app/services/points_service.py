import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.points import PointsLedger, PointsTransaction
from app.models.project import ProjectPriority
from app.models.volunteer_leader import VolunteerOutcome

logger = logging.getLogger(__name__)

BASE_POINTS = {
    ProjectPriority.HIGH: 50,
    ProjectPriority.MEDIUM: 30,
    ProjectPriority.LOW: 20,
}

LEADER_MULTIPLIER = 2


def base_points_for(priority: ProjectPriority) -> int:
    return BASE_POINTS.get(ProjectPriority(priority), 0)


def leader_points(priority: ProjectPriority, outcome: VolunteerOutcome) -> int:
    """Signed points for a volunteer leader: 2x base, negative on failure."""
    points = base_points_for(priority) * LEADER_MULTIPLIER
    return points if VolunteerOutcome(outcome) == VolunteerOutcome.SUCCESS else -points


def _increment_totals(db: Session, user_id, points: int) -> Optional[PointsLedger]:
    # Single UPDATE so concurrent awards never read a stale total
    updated = (
        db.query(PointsLedger)
        .filter(PointsLedger.user_id == user_id)
        .update(
            {
                PointsLedger.total_points: PointsLedger.total_points + points,
                PointsLedger.monthly_points: PointsLedger.monthly_points + points,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        return None
    return (
        db.query(PointsLedger)
        .populate_existing()
        .filter(PointsLedger.user_id == user_id)
        .one()
    )


def award_points(
    db: Session,
    *,
    user_id,
    points: int,
    activity_type: str,
    description: str,
    metadata: Optional[dict] = None,
) -> PointsLedger:
    """
    Add ``points`` to the user's ledger and append a transaction.

    Creates the ledger on first use. Does not commit; the caller owns the
    unit of work.
    """
    ledger = _increment_totals(db, user_id, points)

    if ledger is None:
        try:
            with db.begin_nested():
                ledger = PointsLedger(
                    user_id=user_id,
                    total_points=points,
                    monthly_points=points,
                )
                db.add(ledger)
        except IntegrityError:
            # Another request created the ledger between our UPDATE and INSERT
            ledger = _increment_totals(db, user_id, points)

    db.add(
        PointsTransaction(
            ledger_id=ledger.id,
            activity_type=activity_type,
            points=points,
            description=description,
            details=metadata,
        )
    )
    db.flush()

    logger.info("[POINTS] %+d to user %s (%s)", points, user_id, activity_type)
    return ledger


def get_ledger(db: Session, user_id) -> Optional[PointsLedger]:
    return db.query(PointsLedger).filter(PointsLedger.user_id == user_id).first()
