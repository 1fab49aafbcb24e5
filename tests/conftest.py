"""Shared test fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from rnrsvp.core.database import enable_sqlite_foreign_keys, get_session
from rnrsvp.main import app
from rnrsvp.models import Agenda, Participant, Rsvp


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="participants")
def participants_fixture(session: Session) -> list[Participant]:
    """Three participants, inserted out of name order."""
    people = [
        Participant(name="Carol", email="carol@example.com", invited_by="Alice"),
        Participant(name="Alice", email="alice@example.com", phone="555-0100"),
        Participant(name="Bob", email="bob@example.com"),
    ]
    for person in people:
        session.add(person)
    session.commit()
    for person in people:
        session.refresh(person)
    return people


@pytest.fixture(name="quarter_rows")
def quarter_rows_fixture(session: Session, participants: list[Participant]):
    """RSVPs and agenda items straddling the 2024-05-01..2024-07-31 window."""
    carol, alice, bob = participants
    rows = [
        Rsvp(participant_id=alice.id, event_date=date(2024, 4, 30), status="yes"),
        Rsvp(participant_id=alice.id, event_date=date(2024, 5, 1), status="yes"),
        Rsvp(participant_id=carol.id, event_date=date(2024, 5, 1), status="no"),
        Rsvp(participant_id=bob.id, event_date=date(2024, 7, 31), status="maybe"),
        Rsvp(participant_id=bob.id, event_date=date(2024, 8, 1), status="yes"),
        Agenda(event_date=date(2024, 4, 30), item="Too early"),
        Agenda(event_date=date(2024, 5, 1), item="Hiring", proposed_by="Carol"),
        Agenda(event_date=date(2024, 5, 1), item="Budgets"),
    ]
    for row in rows:
        session.add(row)
    session.commit()
    return rows
