#!/usr/bin/env python3
"""
Send the rolling-quarter RSVP report from the command line.

Builds the same payload as POST /api/send-quarterly-rsvp and posts it to
QUARTERLY_WEBHOOK_URL. Useful from cron when nobody is on the admin page.

Usage:
    python scripts/send_quarterly.py [--dry-run]

Options:
    --dry-run    Print the payload instead of sending it
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio
import json
from datetime import UTC, datetime

from sqlmodel import Session

from rnrsvp.core.database import engine
from rnrsvp.webhooks.quarterly import (
    EASTERN,
    build_quarterly_payload,
    fetch_quarter,
    quarter_window,
    send_quarterly_report,
)


def main(dry_run: bool = False):
    """Build the quarterly report and send (or print) it."""
    with Session(engine) as session:
        if dry_run:
            now = datetime.now(UTC)
            start, end = quarter_window(now.astimezone(EASTERN).date())
            payload = build_quarterly_payload(
                *fetch_quarter(session, start, end), start, end, now
            )
            print(json.dumps(payload, indent=2))
            return

        payload, delivered = asyncio.run(send_quarterly_report(session))

    period = payload["period"]
    print(f"Report for {period['start']} to {period['end']}: ", end="")
    if not delivered:
        print("FAILED")
        sys.exit(1)
    print("OK")


if __name__ == "__main__":
    dry_run = "--dry-run" in sys.argv
    main(dry_run=dry_run)
