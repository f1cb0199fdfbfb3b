"""Unit tests for the volunteer-leader workflow.

Service functions are called directly with the db_session fixture.
No HTTP layer involved.
"""
import uuid

import pytest

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.points import PointsLedger
from app.models.project import Project, ProjectPriority, ProjectStatus
from app.models.volunteer_leader import VolunteerLeaderRequest, VolunteerOutcome, VolunteerStatus
from app.services import volunteer_leader_service as service


def _count_requests(db, project, user):
    return db.query(VolunteerLeaderRequest).filter(
        VolunteerLeaderRequest.project_id == project.id,
        VolunteerLeaderRequest.user_id == user.id,
    ).count()


class TestVolunteer:
    def test_coder_becomes_leader_with_accepted_request(self, db_session, make_project, employee):
        project = make_project(coders=[employee])

        request, updated = service.volunteer(db_session, project.id, employee)

        assert request.status == VolunteerStatus.ACCEPTED
        assert request.user_id == employee.id
        assert updated.project_leader_id == employee.id

    def test_freelancer_and_lead_assignee_are_eligible(self, db_session, make_project, make_user):
        freelancer = make_user()
        lead = make_user()
        p1 = make_project(title="Freelance", freelancers=[freelancer])
        p2 = make_project(title="Led", lead_assignee=lead)

        r1, _ = service.volunteer(db_session, p1.id, freelancer)
        r2, _ = service.volunteer(db_session, p2.id, lead)

        assert r1.status == VolunteerStatus.ACCEPTED
        assert r2.status == VolunteerStatus.ACCEPTED

    def test_non_member_is_forbidden_and_nothing_recorded(self, db_session, make_project, make_user, employee):
        outsider = make_user()
        project = make_project(coders=[employee])

        with pytest.raises(ForbiddenError):
            service.volunteer(db_session, project.id, outsider)

        assert _count_requests(db_session, project, outsider) == 0
        db_session.refresh(project)
        assert project.project_leader_id is None

    def test_second_volunteer_conflicts_and_keeps_one_request(self, db_session, make_project, employee):
        project = make_project(coders=[employee])
        service.volunteer(db_session, project.id, employee)

        with pytest.raises(ConflictError):
            service.volunteer(db_session, project.id, employee)

        assert _count_requests(db_session, project, employee) == 1

    def test_project_with_leader_conflicts(self, db_session, make_project, make_user, employee):
        other = make_user()
        project = make_project(coders=[employee, other])
        service.volunteer(db_session, project.id, other)

        with pytest.raises(ConflictError):
            service.volunteer(db_session, project.id, employee)

        db_session.refresh(project)
        assert project.project_leader_id == other.id
        assert _count_requests(db_session, project, employee) == 0

    def test_missing_project_is_not_found(self, db_session, employee):
        with pytest.raises(NotFoundError):
            service.volunteer(db_session, uuid.uuid4(), employee)


class TestAcceptReject:
    def test_accept_assigns_leader(self, db_session, make_project, make_request, employee):
        project = make_project(coders=[employee])
        pending = make_request(project, employee)

        request, updated = service.accept(db_session, pending.id)

        assert request.status == VolunteerStatus.ACCEPTED
        assert updated.project_leader_id == employee.id

    def test_accept_rejected_when_project_already_led(self, db_session, make_project, make_request, make_user, employee):
        leader = make_user()
        project = make_project(coders=[employee], leader=leader)
        pending = make_request(project, employee)

        with pytest.raises(ConflictError):
            service.accept(db_session, pending.id)

        db_session.refresh(pending)
        db_session.refresh(project)
        assert pending.status == VolunteerStatus.PENDING
        assert project.project_leader_id == leader.id

    def test_accept_requires_pending(self, db_session, make_project, make_request, employee):
        project = make_project(coders=[employee])
        request = make_request(project, employee, status=VolunteerStatus.REJECTED)

        with pytest.raises(ConflictError):
            service.accept(db_session, request.id)

    def test_reject_records_notes(self, db_session, make_project, make_request, employee):
        project = make_project(coders=[employee])
        pending = make_request(project, employee)

        request = service.reject(db_session, pending.id, "Not this quarter")

        assert request.status == VolunteerStatus.REJECTED
        assert request.notes == "Not this quarter"

    def test_reject_requires_pending(self, db_session, make_project, make_request, employee):
        project = make_project(coders=[employee])
        request = make_request(project, employee, status=VolunteerStatus.ACCEPTED)

        with pytest.raises(ConflictError):
            service.reject(db_session, request.id, None)

    def test_unknown_request_is_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            service.accept(db_session, uuid.uuid4())


class TestComplete:
    @pytest.mark.parametrize(
        "priority, outcome, expected",
        [
            (ProjectPriority.HIGH, "success", 100),
            (ProjectPriority.HIGH, "failure", -100),
            (ProjectPriority.MEDIUM, "success", 60),
            (ProjectPriority.MEDIUM, "failure", -60),
            (ProjectPriority.LOW, "success", 40),
            (ProjectPriority.LOW, "failure", -40),
        ],
    )
    def test_points_follow_priority_and_outcome(self, db_session, make_project, employee, priority, outcome, expected):
        project = make_project(priority=priority, coders=[employee])
        request, _ = service.volunteer(db_session, project.id, employee)

        message, completed, ledger = service.complete(db_session, request.id, outcome, "wrap-up")

        assert completed.status == VolunteerStatus.COMPLETED
        assert completed.outcome == VolunteerOutcome(outcome)
        assert completed.points_awarded == expected
        assert completed.completed_at is not None
        assert completed.notes == "wrap-up"
        assert ledger.total_points == expected
        assert ledger.monthly_points == expected
        assert str(abs(expected)) in message

    def test_failure_records_penalty_transaction(self, db_session, make_project, employee):
        project = make_project(title="Apollo", priority=ProjectPriority.LOW, coders=[employee])
        request, _ = service.volunteer(db_session, project.id, employee)

        message, _, ledger = service.complete(db_session, request.id, "failure")

        assert message == "Project outcome recorded. Points deducted: 40"
        transaction = ledger.transactions[-1]
        assert transaction.activity_type == "penalty"
        assert transaction.points == -40
        assert transaction.description == "Volunteer Leader - Apollo (failure)"
        assert transaction.details["penalty_reason"] == "Project failed as volunteer leader"
        assert transaction.details["project_id"] == str(project.id)

    def test_success_accumulates_on_existing_ledger(self, db_session, make_project, employee):
        p1 = make_project(title="One", priority=ProjectPriority.HIGH, coders=[employee])
        p2 = make_project(title="Two", priority=ProjectPriority.MEDIUM, coders=[employee])
        r1, _ = service.volunteer(db_session, p1.id, employee)
        r2, _ = service.volunteer(db_session, p2.id, employee)

        service.complete(db_session, r1.id, "success")
        _, _, ledger = service.complete(db_session, r2.id, "failure")

        assert ledger.total_points == 40
        assert [t.points for t in ledger.transactions] == [100, -60]

    @pytest.mark.parametrize("status", [VolunteerStatus.PENDING, VolunteerStatus.REJECTED, VolunteerStatus.COMPLETED])
    def test_requires_accepted_and_leaves_ledger_untouched(self, db_session, make_project, make_request, employee, status):
        project = make_project(coders=[employee])
        request = make_request(project, employee, status=status)

        with pytest.raises(ConflictError):
            service.complete(db_session, request.id, "success")

        assert db_session.query(PointsLedger).count() == 0
        db_session.refresh(request)
        assert request.status == status

    def test_completing_twice_only_awards_once(self, db_session, make_project, employee):
        project = make_project(coders=[employee])
        request, _ = service.volunteer(db_session, project.id, employee)
        service.complete(db_session, request.id, "success")

        with pytest.raises(ConflictError):
            service.complete(db_session, request.id, "success")

        ledger = db_session.query(PointsLedger).one()
        assert ledger.total_points == 100

    @pytest.mark.parametrize("outcome", [None, "", "partial"])
    def test_invalid_outcome(self, db_session, make_project, employee, outcome):
        project = make_project(coders=[employee])
        request, _ = service.volunteer(db_session, project.id, employee)

        with pytest.raises(ValidationError):
            service.complete(db_session, request.id, outcome)


class TestListings:
    def test_available_projects_annotations(self, db_session, make_project, make_user, employee):
        other = make_user(first_name="Lee", last_name="Lead")
        open_project = make_project(title="Open", coders=[employee])
        led_project = make_project(title="Led", status=ProjectStatus.PLANNING, freelancers=[employee], leader=other)
        mine = make_project(title="Mine", coders=[employee])
        make_project(title="Closed", status=ProjectStatus.COMPLETED, coders=[employee])
        make_project(title="Elsewhere", coders=[other])
        service.volunteer(db_session, mine.id, employee)

        result = {p["title"]: p for p in service.list_available_projects(db_session, employee)}

        assert set(result) == {"Open", "Led", "Mine"}
        assert result["Open"]["has_volunteered"] is False
        assert result["Open"]["volunteer_status"] is None
        assert result["Open"]["has_leader"] is False
        assert result["Led"]["has_leader"] is True
        assert result["Led"]["project_leader"].id == other.id
        assert result["Mine"]["has_volunteered"] is True
        assert result["Mine"]["volunteer_status"] == VolunteerStatus.ACCEPTED
        assert result["Mine"]["has_leader"] is True
        assert open_project.id == result["Open"]["id"]
        assert led_project.id == result["Led"]["id"]

    def test_lists_newest_first(self, db_session, make_project, make_user, employee):
        other = make_user()
        first = make_project(title="First", coders=[employee])
        second = make_project(title="Second", coders=[employee, other])
        r1, _ = service.volunteer(db_session, first.id, employee)
        r2, _ = service.volunteer(db_session, second.id, employee)

        mine = service.list_my_requests(db_session, employee)
        everything = service.list_all_requests(db_session)

        assert [r.id for r in mine] == [r2.id, r1.id]
        assert [r.id for r in everything] == [r2.id, r1.id]
        assert service.list_my_requests(db_session, other) == []

    def test_my_points_defaults_to_zero(self, db_session, employee):
        points = service.get_my_points(db_session, employee)

        assert points["total_points"] == 0
        assert points["transactions"] == []

    def test_project_query_sees_leader(self, db_session, make_project, employee):
        project = make_project(coders=[employee])
        service.volunteer(db_session, project.id, employee)

        stored = db_session.query(Project).filter(Project.id == project.id).one()
        assert stored.project_leader_id == employee.id
