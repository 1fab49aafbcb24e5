"""RSVP routes."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from rnrsvp.calendar.rsvp import ParticipantNotFound, rsvps_for_date, upsert_rsvp
from rnrsvp.core.database import get_session
from rnrsvp.models import Rsvp, RsvpStatus, RsvpUpsert

router = APIRouter(prefix="/api/rsvps", tags=["rsvps"])


@router.get("/{event_date}", response_model=list[RsvpStatus])
async def list_rsvps(event_date: date, session: Session = Depends(get_session)):
    """
    List every participant with their status for a date.

    Participants who have not answered are reported as "maybe".
    """
    return rsvps_for_date(session, event_date)


@router.post("", response_model=Rsvp)
async def set_rsvp(data: RsvpUpsert, session: Session = Depends(get_session)):
    """
    Create or update an RSVP.

    One RSVP exists per participant and date; posting again overwrites the
    status. Returns 404 for an unknown participant.
    """
    try:
        return upsert_rsvp(session, data.participant_id, data.event_date, data.status)
    except ParticipantNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IntegrityError as e:
        session.rollback()
        raise HTTPException(status_code=400, detail=f"Invalid RSVP: {e.orig}")
