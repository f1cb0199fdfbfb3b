import os

# Must be set before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DISABLE_AUTH"] = "false"
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_ANON_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.points import PointsLedger, PointsTransaction  # noqa: F401
from app.models.project import Project, ProjectPriority, ProjectStatus
from app.models.project_members import ProjectMember, WorkRole
from app.models.user import User, UserRole
from app.models.volunteer_leader import VolunteerLeaderRequest, VolunteerStatus

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Fresh schema per test on a shared in-memory SQLite connection.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# Factories
# ------------------------------------------------------------------
@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(role=UserRole.EMPLOYEE, first_name="Test", last_name="User", email=None, password_hash=None):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@acme.io",
            first_name=first_name,
            last_name=last_name,
            role=role,
            password_hash=password_hash,
            is_active=True,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_project(db_session):
    def _make(
        title="Website Revamp",
        priority=ProjectPriority.HIGH,
        status=ProjectStatus.ACTIVE,
        coders=(),
        freelancers=(),
        lead_assignee=None,
        leader=None,
    ):
        project = Project(
            title=title,
            description=f"{title} description",
            priority=priority,
            status=status,
            lead_assignee_id=lead_assignee.id if lead_assignee else None,
            project_leader_id=leader.id if leader else None,
        )
        db_session.add(project)
        db_session.flush()
        for user in coders:
            db_session.add(ProjectMember(project_id=project.id, user_id=user.id, work_role=WorkRole.CODER.value))
        for user in freelancers:
            db_session.add(ProjectMember(project_id=project.id, user_id=user.id, work_role=WorkRole.FREELANCER.value))
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make


@pytest.fixture
def make_request(db_session):
    def _make(project, user, status=VolunteerStatus.PENDING):
        request = VolunteerLeaderRequest(project_id=project.id, user_id=user.id, status=status)
        db_session.add(request)
        db_session.commit()
        db_session.refresh(request)
        return request

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def employee(make_user):
    return make_user(first_name="Eve", last_name="Coder")


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token({"sub": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _headers
