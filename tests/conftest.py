import os
from dataclasses import dataclass
from datetime import timedelta

# Settings are read at import time; tests never need Postgres or a real secret
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BLOB_BACKEND", "local")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hireflow.core.clock import utcnow
from hireflow.core.rate_limiter import rate_limiter
from hireflow.core.security import generate_id
from hireflow.core.statuses import ApplicationStatus, JobStatus, UserRole
from hireflow.database import Base, enable_sqlite_foreign_keys, get_db
from hireflow.dependencies import get_current_user
from hireflow.main import app
from hireflow.models import Application, CandidateProfile, CandidateSkill, Job, User
from hireflow.services.blob_store import get_blob_store


@dataclass
class StubUser:
    id: str = "candidate-1"
    email: str = "candidate@example.com"
    name: str = "Casey Candidate"
    role: str = UserRole.CANDIDATE.value
    company_name: str | None = None

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE.value

    @property
    def is_employer(self) -> bool:
        return self.role == UserRole.EMPLOYER.value


class MemoryBlobStore:
    def __init__(self):
        self.objects: dict[str, bytes] = {}

    def put(self, data: bytes, suffix: str, content_type: str | None = None) -> str:
        url = f"memory://resumes/{len(self.objects) + 1}.{suffix}"
        self.objects[url] = data
        return url


class Factory:
    """Builds persisted rows with sensible defaults."""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def candidate(self, name="Casey Candidate", email=None) -> User:
        uid = generate_id()
        return self._save(
            User(
                id=uid,
                email=email or f"cand-{uid[:8]}@example.com",
                name=name,
                password_hash="not-a-real-hash",
                role=UserRole.CANDIDATE.value,
            )
        )

    def employer(self, name="Erin Employer", company_name="Acme", email=None) -> User:
        uid = generate_id()
        return self._save(
            User(
                id=uid,
                email=email or f"emp-{uid[:8]}@example.com",
                name=name,
                password_hash="not-a-real-hash",
                role=UserRole.EMPLOYER.value,
                company_name=company_name,
            )
        )

    def job(self, employer: User, title="Backend Engineer", status=JobStatus.OPEN.value, **kwargs) -> Job:
        return self._save(Job(id=generate_id(), employer_id=employer.id, title=title, status=status, **kwargs))

    def application(
        self,
        job: Job,
        candidate: User,
        status=ApplicationStatus.APPLIED.value,
        created_ago: timedelta = timedelta(0),
        **kwargs,
    ) -> Application:
        created = utcnow() - created_ago
        return self._save(
            Application(
                id=generate_id(),
                job_id=job.id,
                candidate_id=candidate.id,
                status=status,
                step=kwargs.pop("step", "Application received"),
                resume_url=kwargs.pop("resume_url", "memory://resumes/seed.pdf"),
                created_at=created,
                updated_at=created,
                **kwargs,
            )
        )

    def profile(self, user: User, **fields) -> CandidateProfile:
        return self._save(CandidateProfile(user_id=user.id, **fields))

    def skills(self, user: User, *skills: str) -> None:
        for skill in skills:
            self.db.add(CandidateSkill(user_id=user.id, skill=skill))
        self.db.commit()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def factory(db_session) -> Factory:
    return Factory(db_session)


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def api(db_session, blob_store):
    """
    TestClient backed by the per-test SQLite session.

    Call ``api.act_as(user)`` to authenticate subsequent requests as that user.
    """

    def _db_override():
        yield db_session

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    client = TestClient(app)

    def act_as(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return client

    client.act_as = act_as
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def stub_candidate() -> StubUser:
    return StubUser()


@pytest.fixture
def stub_employer() -> StubUser:
    return StubUser(
        id="employer-1",
        email="employer@example.com",
        name="Erin Employer",
        role=UserRole.EMPLOYER.value,
        company_name="Acme",
    )


@pytest.fixture
def client(stub_candidate: StubUser):
    """Router-level client with no database: repo calls are monkeypatched per test."""

    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_candidate
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def employer_client(stub_employer: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_employer
    yield TestClient(app)
    app.dependency_overrides.clear()
