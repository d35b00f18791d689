import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import timedelta
from unittest.mock import patch
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, get_db, utcnow
from app.models.user import User
from app.models.token import Token
from app.models.project import Project
from app.models.task import Task

# In-memory SQLite database shared by every session of a test
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Fresh database session for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def mock_signin_email():
    """No real email is sent during tests"""
    with patch("app.api.v1.auth.send_signin_email") as mock_send_signin:
        mock_send_signin.return_value = None
        yield mock_send_signin


@pytest.fixture(scope="function")
def client(db_session, mock_signin_email):
    """Test client wired to the test database session"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_test_user(db_session):
    """Factory fixture creating a verified user"""

    def _create_user(email="testuser@example.com", name="Test User"):
        user = User(name=name, email=email, email_verified=utcnow())
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def auth_headers(db_session):
    """Factory fixture issuing a live access token for a user"""
    from app.core.security import create_access_token

    def _headers(user):
        access_token = create_access_token(data={"sub": user.id})
        db_session.add(
            Token(
                token=access_token,
                expiry_date=utcnow() + timedelta(minutes=15),
                user_id=user.id,
            )
        )
        db_session.commit()
        return {"Authorization": f"Bearer {access_token}"}

    return _headers


@pytest.fixture
def authenticated_client(client, create_test_user, auth_headers):
    """Client signed in as the default test user"""
    user = create_test_user()
    client.headers = {**client.headers, **auth_headers(user)}
    return client, user


@pytest.fixture
def make_project(db_session):
    """Factory fixture inserting a project directly into the store"""

    def _make_project(owner, name="Alpha", description=None, members=()):
        project = Project(
            owner_id=owner.id,
            name=name,
            description=description,
            members=list(members),
        )
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make_project


@pytest.fixture
def make_task(db_session):
    """Factory fixture inserting a task directly into the store"""

    def _make_task(project, created_by, title="Task", assigned_to=None, **fields):
        task = Task(
            title=title,
            project_id=project.id,
            created_by_id=created_by.id,
            assigned_to_id=assigned_to.id if assigned_to else None,
            **fields,
        )
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task

    return _make_task
