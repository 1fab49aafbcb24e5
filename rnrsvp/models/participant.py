"""Participant model for people on the lunch list.

Participants are added from the admin page (or by another participant who
invites them). Every RSVP belongs to exactly one participant and is removed
with it.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from rnrsvp.models.rsvp import Rsvp


class ParticipantBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    invited_by: str | None = Field(default=None, max_length=255)


class Participant(ParticipantBase, table=True):
    """A person who can RSVP to lunches.

    Attributes:
        id: Auto-incremented identifier.
        name: Display name, used for ordering everywhere.
        email: Contact email, optional.
        phone: Contact phone, optional.
        invited_by: Free-text attribution of who brought this person in.
        created_at: When the participant was added.
        rsvps: Every RSVP this participant has given. Deleted with the
            participant (ORM cascade plus ``ON DELETE CASCADE`` in the store).
    """
    __tablename__ = "participants"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    rsvps: list["Rsvp"] = Relationship(back_populates="participant", cascade_delete=True)


class ParticipantCreate(ParticipantBase):
    pass


class ParticipantPublic(ParticipantBase):
    id: int
