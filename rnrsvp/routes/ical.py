"""Calendar export route."""
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel import Session

from rnrsvp.calendar.ical import build_ical, ical_filename
from rnrsvp.core.database import get_session
from rnrsvp.models import get_meeting_settings

router = APIRouter(prefix="/api/ical", tags=["ical"])


@router.get("/{event_date}")
async def download_ical(event_date: date, session: Session = Depends(get_session)):
    """Download the lunch on event_date as an .ics attachment."""
    body = build_ical(event_date, get_meeting_settings(session))
    return Response(
        content=body,
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{ical_filename(event_date)}"'
        },
    )
