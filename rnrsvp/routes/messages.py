"""Contact message routes."""
import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from rnrsvp.core.config import settings
from rnrsvp.core.database import get_session
from rnrsvp.models import Message, MessageCreate
from rnrsvp.webhooks import client as webhooks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=list[Message])
async def list_messages(session: Session = Depends(get_session)):
    """List messages, newest first."""
    statement = select(Message).order_by(Message.created_at.desc(), Message.id.desc())
    return session.exec(statement).all()


@router.post("", response_model=Message, status_code=201)
async def create_message(data: MessageCreate, session: Session = Depends(get_session)):
    """
    Store a contact message and forward it to the contact webhook.

    Delivery is best-effort; the message is kept even if the webhook fails.
    """
    message = Message.model_validate(data)
    session.add(message)
    session.commit()
    session.refresh(message)
    logger.info(f"Message {message.id} received from {message.sender_name or 'anonymous'}")

    await webhooks.send_webhook(
        settings.contact_webhook_url, webhooks.message_payload(message)
    )
    return message
