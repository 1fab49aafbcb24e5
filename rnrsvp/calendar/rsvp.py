"""RSVP bookkeeping: one status per participant per lunch date."""
import logging
from datetime import UTC, date, datetime

from sqlalchemy import and_, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from rnrsvp.models import DEFAULT_STATUS, Participant, Rsvp, RsvpStatus

logger = logging.getLogger(__name__)

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class ParticipantNotFound(LookupError):
    """Raised when an RSVP names a participant that does not exist."""

    def __init__(self, participant_id: int):
        super().__init__(f"Participant {participant_id} not found")
        self.participant_id = participant_id


def _find_rsvp(session: Session, participant_id: int, event_date: date) -> Rsvp | None:
    statement = (
        select(Rsvp)
        .where(Rsvp.participant_id == participant_id)
        .where(Rsvp.event_date == event_date)
    )
    return session.exec(statement).first()


def _native_upsert(
    session: Session,
    insert,
    participant_id: int,
    event_date: date,
    status: str | None,
) -> None:
    statement = insert(Rsvp.__table__).values(
        participant_id=participant_id,
        event_date=event_date,
        status=status if status is not None else DEFAULT_STATUS,
        created_at=datetime.now(UTC),
    )
    conflict_target = [Rsvp.__table__.c.participant_id, Rsvp.__table__.c.event_date]
    if status is None:
        # Nothing to overwrite; "maybe" only applies to a brand new row
        statement = statement.on_conflict_do_nothing(index_elements=conflict_target)
    else:
        statement = statement.on_conflict_do_update(
            index_elements=conflict_target,
            set_={"status": statement.excluded.status},
        )
    session.connection().execute(statement)
    session.commit()


def _insert_or_update(
    session: Session,
    participant_id: int,
    event_date: date,
    status: str | None,
) -> None:
    """Upsert for stores without ON CONFLICT.

    Tries the insert first and falls back to an update when the unique pair
    already exists. A concurrent insert between our read and write shows up as
    an IntegrityError; the loop retries once to pick up that row.
    """
    for attempt in range(2):
        existing = _find_rsvp(session, participant_id, event_date)
        if existing is not None:
            if status is not None:
                existing.status = status
                session.add(existing)
            session.commit()
            return

        session.add(
            Rsvp(
                participant_id=participant_id,
                event_date=event_date,
                status=status if status is not None else DEFAULT_STATUS,
            )
        )
        try:
            session.commit()
            return
        except IntegrityError:
            session.rollback()
            if attempt:
                raise
            logger.info(
                f"RSVP for participant {participant_id} on {event_date} "
                "was written concurrently, retrying as update"
            )


def upsert_rsvp(
    session: Session,
    participant_id: int,
    event_date: date,
    status: str | None = None,
) -> Rsvp:
    """
    Record a participant's status for a date.

    Creates the RSVP if the (participant, date) pair has none, otherwise
    overwrites its status and keeps the original created_at. Any status text
    is stored verbatim. When status is None a new row gets "maybe" and an
    existing row is left alone.

    Raises ParticipantNotFound for an unknown participant id, or when the
    participant disappears between the write and the re-read. A foreign key
    violation raised by the store (participant deleted mid-request) propagates
    as IntegrityError.
    """
    if session.get(Participant, participant_id) is None:
        raise ParticipantNotFound(participant_id)

    insert = UPSERT_DIALECTS.get(session.get_bind().dialect.name)
    if insert is not None:
        _native_upsert(session, insert, participant_id, event_date, status)
    else:
        _insert_or_update(session, participant_id, event_date, status)

    rsvp = _find_rsvp(session, participant_id, event_date)
    if rsvp is None:
        # Participant deleted after the write; the cascade took the row with it
        raise ParticipantNotFound(participant_id)
    session.refresh(rsvp)
    logger.info(
        f"RSVP participant={participant_id} date={event_date} status={rsvp.status}"
    )
    return rsvp


def rsvps_for_date(session: Session, event_date: date) -> list[RsvpStatus]:
    """
    List every participant once with their status for event_date.

    Participants drive the query; those without an RSVP on that date are
    reported as "maybe". Ordered by participant name.
    """
    statement = (
        select(
            Participant.id,
            Participant.name,
            func.coalesce(Rsvp.status, DEFAULT_STATUS).label("status"),
        )
        .outerjoin(
            Rsvp,
            and_(Rsvp.participant_id == Participant.id, Rsvp.event_date == event_date),
        )
        .order_by(Participant.name, Participant.id)
    )
    return [
        RsvpStatus(participant_id=participant_id, name=name, status=status)
        for participant_id, name, status in session.exec(statement).all()
    ]
