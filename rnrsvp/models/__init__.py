from rnrsvp.models.agenda import Agenda, AgendaCreate
from rnrsvp.models.meeting_settings import (
    MeetingSettings,
    MeetingSettingsUpdate,
    get_meeting_settings,
)
from rnrsvp.models.message import Message, MessageCreate
from rnrsvp.models.participant import Participant, ParticipantCreate, ParticipantPublic
from rnrsvp.models.rsvp import DEFAULT_STATUS, Rsvp, RsvpStatus, RsvpUpsert

__all__ = [
    "Agenda",
    "AgendaCreate",
    "DEFAULT_STATUS",
    "MeetingSettings",
    "MeetingSettingsUpdate",
    "Message",
    "MessageCreate",
    "Participant",
    "ParticipantCreate",
    "ParticipantPublic",
    "Rsvp",
    "RsvpStatus",
    "RsvpUpsert",
    "get_meeting_settings",
]
