"""Meeting settings model (the singleton ``settings`` row).

This module defines the MeetingSettings model which holds where and when the
lunch happens and who organizes it. Exactly one row exists; it is read by the
calendar export and overwritten from the admin page.
"""

from sqlmodel import Field, Session, SQLModel

SETTINGS_ID = 1


class MeetingSettingsBase(SQLModel):
    location_name: str = Field(default="TBD", max_length=255)
    location_address: str = Field(default="TBD", max_length=255)
    meeting_time: str = Field(default="12:00 PM", max_length=100)
    organizer_email: str = Field(default="organizer@example.com", max_length=255)


class MeetingSettings(MeetingSettingsBase, table=True):
    """The single mutable settings record.

    Attributes:
        id: Always ``SETTINGS_ID``.
        location_name: Restaurant or venue name.
        location_address: Street address of the venue.
        meeting_time: Free text such as "12:00 PM". Parsed loosely when the
            calendar export is built; see ``parse_meeting_time``.
        organizer_email: Contact address for the organizer.
    """
    __tablename__ = "settings"

    id: int | None = Field(default=None, primary_key=True)


class MeetingSettingsUpdate(MeetingSettingsBase):
    pass


def get_meeting_settings(session: Session) -> MeetingSettings:
    """Return the settings row, creating it with defaults if missing."""
    row = session.get(MeetingSettings, SETTINGS_ID)
    if row is None:
        row = MeetingSettings(id=SETTINGS_ID)
        session.add(row)
        session.commit()
        session.refresh(row)
    return row
