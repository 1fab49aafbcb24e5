"""Contact message model."""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class MessageBase(SQLModel):
    sender_name: str | None = Field(default=None, max_length=255)
    sender_email: str | None = Field(default=None, max_length=255)
    message: str = Field(min_length=1)


class Message(MessageBase, table=True):
    """A note sent through the contact form. Append-only."""
    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class MessageCreate(MessageBase):
    pass
