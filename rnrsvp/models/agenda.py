"""Agenda item model for topics proposed for a lunch date."""

from datetime import UTC, date, datetime

from sqlmodel import Field, SQLModel


class AgendaBase(SQLModel):
    event_date: date
    item: str = Field(min_length=1)
    proposed_by: str | None = Field(default=None, max_length=255)


class Agenda(AgendaBase, table=True):
    """A discussion topic for one event date.

    Many items may exist per date. Items are never edited, only created and
    deleted.
    """
    __tablename__ = "agendas"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AgendaCreate(AgendaBase):
    pass
