"""Tests for the webhook dispatcher and the quarterly report."""

import asyncio
import json
from datetime import UTC, date, datetime
from types import SimpleNamespace

import httpx
import pytest
from sqlmodel import Session

from rnrsvp.core.config import settings
from rnrsvp.webhooks.client import message_payload, participant_payload, send_webhook
from rnrsvp.webhooks.quarterly import (
    build_quarterly_payload,
    fetch_quarter,
    quarter_window,
    send_quarterly_report,
)

HOOK_URL = "https://hooks.example.com/catch/1"
NOW = datetime(2024, 6, 15, 16, 0, tzinfo=UTC)


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def _send(payload, handler, url=HOOK_URL):
    async with _mock_client(handler) as client:
        return await send_webhook(url, payload, client=client)


class TestSendWebhook:
    """Tests for send_webhook."""

    def test_posts_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"status": "success"})

        assert asyncio.run(_send({"type": "ping", "n": 1}, handler)) is True
        assert seen == {
            "method": "POST",
            "url": HOOK_URL,
            "content_type": "application/json",
            "body": {"type": "ping", "n": 1},
        }

    def test_non_2xx_is_failure(self):
        result = asyncio.run(_send({"type": "ping"}, lambda request: httpx.Response(500)))
        assert result is False

    def test_unreachable_host_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        assert asyncio.run(_send({"type": "ping"}, handler)) is False

    def test_timeout_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert asyncio.run(_send({"type": "ping"}, handler)) is False

    def test_unconfigured_url_skips(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("should not be called")

        assert asyncio.run(_send({"type": "ping"}, handler, url="")) is False


class TestNotificationPayloads:
    def test_participant_payload(self):
        participant = SimpleNamespace(
            id=7,
            name="Dana",
            email="dana@example.com",
            phone=None,
            invited_by="Alice",
            created_at=datetime(2024, 6, 1, 12, 0),
        )
        payload = participant_payload(participant)
        assert payload["type"] == "new_participant"
        assert payload["name"] == "Dana"
        assert payload["invited_by"] == "Alice"
        assert payload["created_at"] == "2024-06-01T12:00:00"

    def test_message_payload(self):
        message = SimpleNamespace(
            id=3,
            sender_name=None,
            sender_email="x@example.com",
            message="Hello",
            created_at=datetime(2024, 6, 1, 12, 0),
        )
        payload = message_payload(message)
        assert payload["type"] == "contact_message"
        assert payload["message"] == "Hello"


class TestQuarterWindow:
    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2024, 6, 15), (date(2024, 5, 1), date(2024, 7, 31))),
            (date(2024, 1, 1), (date(2023, 12, 1), date(2024, 2, 29))),
            (date(2024, 12, 31), (date(2024, 11, 1), date(2025, 1, 31))),
            (date(2023, 3, 31), (date(2023, 2, 1), date(2023, 4, 30))),
        ],
    )
    def test_window(self, today, expected):
        assert quarter_window(today) == expected


class TestQuarterlyPayload:
    """Tests for fetching and grouping the quarterly report."""

    def _payload(self, session: Session) -> dict:
        start, end = quarter_window(date(2024, 6, 15))
        participants, rsvp_rows, agenda_rows = fetch_quarter(session, start, end)
        return build_quarterly_payload(
            participants, rsvp_rows, agenda_rows, start, end, NOW
        )

    def test_window_boundaries(self, session: Session, quarter_rows):
        payload = self._payload(session)
        assert payload["type"] == "quarterly_rsvp_report"
        assert payload["period"] == {"start": "2024-05-01", "end": "2024-07-31"}
        assert set(payload["rsvps_by_date"]) == {"2024-05-01", "2024-07-31"}
        assert set(payload["agendas_by_date"]) == {"2024-05-01"}

    def test_same_date_rsvps_grouped_in_name_order(self, session: Session, quarter_rows):
        entries = self._payload(session)["rsvps_by_date"]["2024-05-01"]
        assert [e["name"] for e in entries] == ["Alice", "Carol"]
        assert entries[0] == {
            "name": "Alice",
            "email": "alice@example.com",
            "phone": "555-0100",
            "invited_by": None,
            "status": "yes",
        }
        assert entries[1]["status"] == "no"
        assert entries[1]["invited_by"] == "Alice"

    def test_agenda_proposer_defaults_to_anonymous(self, session: Session, quarter_rows):
        entries = self._payload(session)["agendas_by_date"]["2024-05-01"]
        assert entries == [
            {"item": "Hiring", "proposed_by": "Carol"},
            {"item": "Budgets", "proposed_by": "Anonymous"},
        ]

    def test_participants_listed_flat(self, session: Session, quarter_rows):
        participants = self._payload(session)["participants"]
        assert [p["name"] for p in participants] == ["Alice", "Bob", "Carol"]

    def test_timestamps(self, session: Session, participants):
        payload = self._payload(session)
        assert payload["sent_at"] == "2024-06-15T16:00:00+00:00"
        assert payload["sent_at_eastern"] == "Saturday, June 15, 2024 at 12:00 PM EDT"
        assert payload["rsvps_by_date"] == {}
        assert payload["agendas_by_date"] == {}

    def test_pure_grouping(self):
        rows = [
            SimpleNamespace(
                name="A", email=None, phone=None, invited_by=None,
                event_date=date(2024, 5, 2), status="yes",
            ),
            SimpleNamespace(
                name="B", email=None, phone=None, invited_by=None,
                event_date=None, status=None,
            ),
        ]
        payload = build_quarterly_payload(
            [], rows, [], date(2024, 5, 1), date(2024, 7, 31), NOW
        )
        assert list(payload["rsvps_by_date"]) == ["2024-05-02"]
        assert len(payload["rsvps_by_date"]["2024-05-02"]) == 1


class TestSendQuarterlyReport:
    def test_posts_report_to_quarterly_hook(
        self, session: Session, quarter_rows, monkeypatch
    ):
        monkeypatch.setattr(settings, "quarterly_webhook_url", HOOK_URL)
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(json.loads(request.content))
            return httpx.Response(200)

        async def run():
            async with _mock_client(handler) as client:
                return await send_quarterly_report(session, now=NOW, client=client)

        payload, delivered = asyncio.run(run())
        assert delivered is True
        assert received == [payload]
        assert payload["period"]["start"] == "2024-05-01"

    def test_unconfigured_hook_reports_failure(self, session: Session, monkeypatch):
        monkeypatch.setattr(settings, "quarterly_webhook_url", "")
        payload, delivered = asyncio.run(send_quarterly_report(session, now=NOW))
        assert delivered is False
        assert payload["type"] == "quarterly_rsvp_report"
