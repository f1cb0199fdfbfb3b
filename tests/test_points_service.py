"""Unit tests for the points ledger.

Scoring is pure; ledger writes run against the db_session fixture.
"""
import pytest

from app.models.points import PointsLedger, PointsTransaction
from app.models.project import ProjectPriority
from app.models.volunteer_leader import VolunteerOutcome
from app.services import points_service


class TestLeaderPoints:
    """Priority base points with the 2x leader multiplier."""

    @pytest.mark.parametrize(
        "priority, expected",
        [
            (ProjectPriority.HIGH, 100),
            (ProjectPriority.MEDIUM, 60),
            (ProjectPriority.LOW, 40),
        ],
    )
    def test_success_awards_double_base(self, priority, expected):
        assert points_service.leader_points(priority, VolunteerOutcome.SUCCESS) == expected

    @pytest.mark.parametrize(
        "priority, expected",
        [
            (ProjectPriority.HIGH, -100),
            (ProjectPriority.MEDIUM, -60),
            (ProjectPriority.LOW, -40),
        ],
    )
    def test_failure_deducts_double_base(self, priority, expected):
        assert points_service.leader_points(priority, VolunteerOutcome.FAILURE) == expected

    def test_accepts_raw_string_values(self):
        assert points_service.leader_points("medium", "success") == 60

    def test_base_points_table(self):
        assert points_service.base_points_for(ProjectPriority.HIGH) == 50
        assert points_service.base_points_for(ProjectPriority.MEDIUM) == 30
        assert points_service.base_points_for(ProjectPriority.LOW) == 20


class TestAwardPoints:
    def test_first_award_creates_ledger(self, db_session, employee):
        ledger = points_service.award_points(
            db_session,
            user_id=employee.id,
            points=100,
            activity_type="project_completion",
            description="Volunteer Leader - Alpha (success)",
            metadata={"project_id": "abc"},
        )
        db_session.commit()
        db_session.refresh(ledger)

        assert ledger.user_id == employee.id
        assert ledger.total_points == 100
        assert ledger.monthly_points == 100
        assert len(ledger.transactions) == 1
        assert ledger.transactions[0].details == {"project_id": "abc"}

    def test_later_awards_increment_existing_ledger(self, db_session, employee):
        for points in (100, -40, 60):
            points_service.award_points(
                db_session,
                user_id=employee.id,
                points=points,
                activity_type="project_completion" if points > 0 else "penalty",
                description="entry",
            )
        db_session.commit()

        ledgers = db_session.query(PointsLedger).filter(PointsLedger.user_id == employee.id).all()
        assert len(ledgers) == 1
        ledger = ledgers[0]
        db_session.refresh(ledger)
        assert ledger.total_points == 120
        assert ledger.monthly_points == 120
        assert [t.points for t in ledger.transactions] == [100, -40, 60]

    def test_rollback_discards_award(self, db_session, employee):
        points_service.award_points(
            db_session,
            user_id=employee.id,
            points=50,
            activity_type="project_completion",
            description="entry",
        )
        db_session.rollback()

        assert points_service.get_ledger(db_session, employee.id) is None
        assert db_session.query(PointsTransaction).count() == 0
