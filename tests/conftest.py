"""
Shared fixtures.
The app runs against an in-memory SQLite database that is rebuilt for
every test; emails fall back to the logging transport.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.pop("SMTP_HOST", None)

import pytest
from fastapi.testclient import TestClient

from skilllink.domain.models.user import User, UserRole, AccountType
from skilllink.infrastructure.auth import hash_password, get_otp_store
from skilllink.infrastructure.db import models  # noqa: F401
from skilllink.infrastructure.db.database import Base, SessionLocal, engine, get_db
from skilllink.infrastructure.email.email_service import get_email_service
from skilllink.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork
from skilllink.main import app


PASSWORD = "Secret123!"


@pytest.fixture(autouse=True)
def database():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    service = get_email_service()
    service.clear_sent_emails()
    yield service
    service.clear_sent_emails()


@pytest.fixture
def client(database, mailer):
    def override_get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    get_otp_store().clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email, account_type="skilled_worker", firstname="Test", lastname="User", **extra):
    """Register through the API; returns `(user, headers)`."""
    payload = {
        "firstname": firstname,
        "lastname": lastname,
        "email": email,
        "password": PASSWORD,
        "accountType": account_type,
        **extra,
    }
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], auth_headers(body["token"])


@pytest.fixture
def employer(client):
    return register(
        client, "employer@example.com", "employer", "Ada", "Okafor",
        employer={"companyName": "Okafor Builds", "location": "Lagos"},
    )


@pytest.fixture
def worker(client):
    return register(
        client, "worker@example.com", "skilled_worker", "Tunde", "Bello",
        skilledWorker={
            "fullName": "Tunde Bello",
            "professionalTitle": "Electrician",
            "primarySkills": "wiring, solar",
            "location": "Abuja",
            "hourlyRate": 50,
            "availability": "full-time",
        },
    )


@pytest.fixture
def admin(client, db_session):
    """Admin accounts are never self-registered; seed one and log in."""
    uow = SQLAlchemyUnitOfWork(db_session)
    uow.users.save(User(
        email="admin@example.com",
        firstname="Site",
        lastname="Admin",
        role=UserRole.ADMIN,
        account_type=AccountType.EMPLOYER,
        password_hash=hash_password(PASSWORD),
    ))
    uow.commit()
    response = client.post("/api/admin/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert response.status_code == 200, response.text
    body = response.json()
    # Later requests authenticate explicitly
    client.cookies.clear()
    return body["user"], auth_headers(body["token"])


def create_job(client, headers, **overrides):
    payload = {
        "title": "Rewire office",
        "description": "Full rewiring of a two-floor office",
        "budgetRange": {"min": 100, "max": 500},
        "timeline": "2 weeks",
        "requiredSkills": ["wiring"],
        **overrides,
    }
    response = client.post("/api/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["job"]


def open_project(client, employer, worker):
    """Job, invite and acceptance; returns `(job, invite, project)`."""
    _, employer_headers = employer
    worker_user, worker_headers = worker
    job = create_job(client, employer_headers)
    response = client.post(
        "/api/invites",
        json={"jobId": job["id"], "workerId": worker_user["id"], "message": "Join us"},
        headers=employer_headers,
    )
    assert response.status_code == 201, response.text
    invite = response.json()["invite"]
    response = client.post(f"/api/invites/{invite['id']}/accept", headers=worker_headers)
    assert response.status_code == 200, response.text
    body = response.json()
    return job, body["invite"], body["project"]
