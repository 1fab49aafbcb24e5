"""Participant routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from rnrsvp.core.config import settings
from rnrsvp.core.database import get_session
from rnrsvp.models import Participant, ParticipantCreate, ParticipantPublic
from rnrsvp.webhooks import client as webhooks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/participants", tags=["participants"])


@router.get("", response_model=list[ParticipantPublic])
async def list_participants(session: Session = Depends(get_session)):
    """List all participants sorted by name."""
    statement = select(Participant).order_by(Participant.name, Participant.id)
    return session.exec(statement).all()


@router.post("", response_model=ParticipantPublic, status_code=201)
async def create_participant(
    data: ParticipantCreate,
    session: Session = Depends(get_session),
):
    """
    Add a participant.

    Sends the invite webhook once the row is stored. The webhook result does
    not affect the response: a failed delivery is only logged.
    """
    participant = Participant.model_validate(data)
    session.add(participant)
    session.commit()
    session.refresh(participant)
    logger.info(f"Participant {participant.id} added: {participant.name}")

    await webhooks.send_webhook(
        settings.invite_webhook_url, webhooks.participant_payload(participant)
    )
    return participant


@router.delete("/{participant_id}")
async def delete_participant(
    participant_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a participant.

    All of the participant's RSVPs are deleted with them.
    """
    participant = session.get(Participant, participant_id)
    if not participant:
        raise HTTPException(status_code=404, detail="Participant not found")

    session.delete(participant)
    session.commit()
    logger.info(f"Participant {participant_id} deleted")
    return {"success": True}
