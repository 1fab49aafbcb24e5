"""RSVP model: one attendance status per participant per lunch date."""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from rnrsvp.models.participant import Participant

DEFAULT_STATUS = "maybe"


class Rsvp(SQLModel, table=True):
    """A participant's answer for one event date.

    The (participant_id, event_date) pair is unique. Writing the same pair
    again overwrites ``status``; ``created_at`` keeps the first answer's time.
    Status is free text ("yes", "no", "maybe" in practice).

    Attributes:
        id: Auto-incremented identifier.
        participant_id: Foreign key to the Participant, cascading on delete.
        event_date: The lunch date this answer is for.
        status: Attendance status, "maybe" when not given.
        created_at: When the pair was first answered.
        participant: Reference to the parent Participant.
    """
    __tablename__ = "rsvps"
    __table_args__ = (UniqueConstraint("participant_id", "event_date"),)

    id: int | None = Field(default=None, primary_key=True)
    participant_id: int = Field(foreign_key="participants.id", ondelete="CASCADE")
    event_date: date = Field(index=True)
    status: str = Field(default=DEFAULT_STATUS, sa_type=Text)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    participant: Optional["Participant"] = Relationship(back_populates="rsvps")


class RsvpUpsert(SQLModel):
    participant_id: int
    event_date: date
    status: str | None = None


class RsvpStatus(SQLModel):
    """A participant annotated with their status for one date."""
    participant_id: int
    name: str
    status: str
