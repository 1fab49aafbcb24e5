"""Outbound webhook notifications to the automation endpoints."""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


async def send_webhook(
    url: str,
    payload: dict[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """
    POST payload as JSON to url.

    Returns True when the endpoint answers with a 2xx status. Transport
    failures (DNS, refused connection, timeout) are logged and reported as
    False rather than raised, so callers can treat notification as
    best-effort. An empty url means the webhook is not configured.
    """
    if not url:
        logger.info(f"Webhook for {payload.get('type')} not configured, skipping")
        return False

    async def _post(request_client: httpx.AsyncClient) -> httpx.Response:
        return await request_client.post(url, json=payload)

    try:
        if client is not None:
            response = await _post(client)
        else:
            async with httpx.AsyncClient() as owned_client:
                response = await _post(owned_client)
    except httpx.HTTPError as e:
        logger.error(f"Webhook {payload.get('type')} to {url} failed: {e!r}")
        return False

    if response.is_success:
        logger.info(f"Webhook {payload.get('type')} delivered ({response.status_code})")
        return True

    logger.warning(
        f"Webhook {payload.get('type')} rejected by {url}: {response.status_code}"
    )
    return False


def participant_payload(participant) -> dict[str, Any]:
    """Invite notification for a newly added participant."""
    return {
        "type": "new_participant",
        "id": participant.id,
        "name": participant.name,
        "email": participant.email,
        "phone": participant.phone,
        "invited_by": participant.invited_by,
        "created_at": participant.created_at.isoformat(),
    }


def message_payload(message) -> dict[str, Any]:
    """Contact-form notification for a new message."""
    return {
        "type": "contact_message",
        "id": message.id,
        "sender_name": message.sender_name,
        "sender_email": message.sender_email,
        "message": message.message,
        "created_at": message.created_at.isoformat(),
    }
