"""Shared fixtures: in-memory database, seeded catalog and API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import catalog.models  # noqa: F401
from catalog.database import Base, get_db
from catalog.main import app
from catalog.models import Album
from catalog.seed import seed_catalog


@pytest.fixture
def engine():
    """SQLite in-memory engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Empty database session."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db):
    """Session on a catalog holding the sample albums."""
    seed_catalog(db)
    return db


@pytest.fixture
def client(seeded_db):
    """API client bound to the seeded catalog."""
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def album_id_by_ean(seeded_db):
    """Look up the ID of a seeded album by its EAN."""
    def lookup(ean):
        return seeded_db.query(Album.id).filter(Album.ean == ean).scalar()
    return lookup


class RecordingMailService:
    """Mail collaborator that remembers what it was asked to send."""

    def __init__(self):
        self.sent = []

    def send(self, subject, body):
        self.sent.append((subject, body))


class FailingMailService:
    """Mail collaborator whose server is unreachable."""

    def send(self, subject, body):
        raise ConnectionRefusedError("SMTP server unreachable")


@pytest.fixture
def mail_service():
    return RecordingMailService()


@pytest.fixture
def failing_mail_service():
    return FailingMailService()
