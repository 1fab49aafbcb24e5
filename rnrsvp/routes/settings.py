"""Settings routes for the singleton meeting settings."""
import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session

from rnrsvp.core.database import get_session
from rnrsvp.models import MeetingSettings, MeetingSettingsUpdate, get_meeting_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=MeetingSettings)
async def read_settings(session: Session = Depends(get_session)):
    """Return the current location, time and organizer."""
    return get_meeting_settings(session)


@router.put("", response_model=MeetingSettings)
async def update_settings(
    update: MeetingSettingsUpdate,
    session: Session = Depends(get_session),
):
    """
    Overwrite the meeting settings.

    All four fields are replaced in place; the row itself is never recreated.
    """
    row = get_meeting_settings(session)
    row.sqlmodel_update(update.model_dump())
    session.add(row)
    session.commit()
    session.refresh(row)
    logger.info(
        f"Settings updated: {row.location_name} at {row.meeting_time}"
    )
    return row
