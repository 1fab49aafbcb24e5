"""Route for pushing the rolling-quarter report to the quarterly webhook."""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from rnrsvp.core.database import get_session
from rnrsvp.webhooks import quarterly

router = APIRouter(prefix="/api", tags=["quarterly"])


@router.post("/send-quarterly-rsvp")
async def send_quarterly_rsvp(session: Session = Depends(get_session)):
    """
    Build the quarterly RSVP report and send it.

    Returns 502 when the webhook could not be delivered so the admin page can
    show the failure.
    """
    payload, delivered = await quarterly.send_quarterly_report(session)
    if not delivered:
        raise HTTPException(status_code=502, detail="Failed to deliver quarterly report")

    return {
        "success": True,
        "period": payload["period"],
        "participants": len(payload["participants"]),
        "rsvp_dates": sorted(payload["rsvps_by_date"]),
        "agenda_dates": sorted(payload["agendas_by_date"]),
    }
