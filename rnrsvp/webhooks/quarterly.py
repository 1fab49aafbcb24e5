"""Rolling-quarter RSVP report delivered to the quarterly webhook.

The report covers the previous, current and next calendar month relative to
today. RSVPs and agenda items in that window are grouped by ISO date so the
automation on the other end can render one section per lunch.
"""
import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

import httpx
from sqlalchemy import and_
from sqlmodel import Session, select

from rnrsvp.core.config import settings
from rnrsvp.models import Agenda, Participant, Rsvp
from rnrsvp.webhooks.client import send_webhook

logger = logging.getLogger(__name__)

EASTERN = ZoneInfo("America/New_York")
REPORT_TYPE = "quarterly_rsvp_report"
ANONYMOUS = "Anonymous"


def _first_of_next_month(day: date) -> date:
    return (day.replace(day=1) + timedelta(days=32)).replace(day=1)


def quarter_window(today: date) -> tuple[date, date]:
    """First day of last month through last day of next month (inclusive)."""
    this_month = today.replace(day=1)
    start = (this_month - timedelta(days=1)).replace(day=1)
    end = _first_of_next_month(_first_of_next_month(this_month)) - timedelta(days=1)
    return start, end


def fetch_quarter(session: Session, start: date, end: date) -> tuple[list, list, list]:
    """
    Load everything the report needs for [start, end].

    Returns (participants, rsvp_rows, agenda_rows). RSVP rows come from
    participants left-joined to their RSVPs inside the window, so a
    participant without any answer yields one row with event_date None.
    """
    participants = session.exec(
        select(Participant).order_by(Participant.name, Participant.id)
    ).all()

    rsvp_statement = (
        select(
            Participant.name,
            Participant.email,
            Participant.phone,
            Participant.invited_by,
            Rsvp.event_date,
            Rsvp.status,
        )
        .outerjoin(
            Rsvp,
            and_(
                Rsvp.participant_id == Participant.id,
                Rsvp.event_date >= start,
                Rsvp.event_date <= end,
            ),
        )
        .order_by(Rsvp.event_date, Participant.name, Participant.id)
    )
    rsvp_rows = session.exec(rsvp_statement).all()

    agenda_rows = session.exec(
        select(Agenda)
        .where(Agenda.event_date >= start)
        .where(Agenda.event_date <= end)
        .order_by(Agenda.event_date, Agenda.created_at, Agenda.id)
    ).all()

    return list(participants), list(rsvp_rows), list(agenda_rows)


def _group_by_date(rows: Iterable, entry) -> dict[str, list[dict[str, Any]]]:
    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        if row.event_date is None:
            continue
        grouped.setdefault(row.event_date.isoformat(), []).append(entry(row))
    return grouped


def build_quarterly_payload(
    participants: Iterable,
    rsvp_rows: Iterable,
    agenda_rows: Iterable,
    start: date,
    end: date,
    now: datetime,
) -> dict[str, Any]:
    """Shape the fetched rows into the webhook payload. Row order is kept."""
    rsvps_by_date = _group_by_date(
        rsvp_rows,
        lambda row: {
            "name": row.name,
            "email": row.email,
            "phone": row.phone,
            "invited_by": row.invited_by,
            "status": row.status,
        },
    )
    agendas_by_date = _group_by_date(
        agenda_rows,
        lambda row: {
            "item": row.item,
            "proposed_by": row.proposed_by or ANONYMOUS,
        },
    )

    return {
        "type": REPORT_TYPE,
        "period": {"start": start.isoformat(), "end": end.isoformat()},
        "participants": [
            {
                "id": p.id,
                "name": p.name,
                "email": p.email,
                "phone": p.phone,
                "invited_by": p.invited_by,
            }
            for p in participants
        ],
        "rsvps_by_date": rsvps_by_date,
        "agendas_by_date": agendas_by_date,
        "sent_at": now.astimezone(UTC).isoformat(),
        "sent_at_eastern": now.astimezone(EASTERN).strftime(
            "%A, %B %d, %Y at %I:%M %p %Z"
        ),
    }


async def send_quarterly_report(
    session: Session,
    *,
    now: datetime | None = None,
    client: httpx.AsyncClient | None = None,
) -> tuple[dict[str, Any], bool]:
    """Build the rolling-quarter report and post it. Returns (payload, delivered)."""
    now = now or datetime.now(UTC)
    start, end = quarter_window(now.astimezone(EASTERN).date())
    participants, rsvp_rows, agenda_rows = fetch_quarter(session, start, end)
    payload = build_quarterly_payload(
        participants, rsvp_rows, agenda_rows, start, end, now
    )
    logger.info(
        f"Quarterly report {start}..{end}: {len(payload['rsvps_by_date'])} RSVP dates, "
        f"{len(payload['agendas_by_date'])} agenda dates"
    )
    delivered = await send_webhook(settings.quarterly_webhook_url, payload, client=client)
    return payload, delivered
