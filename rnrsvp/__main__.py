"""Run the server: ``python -m rnrsvp``."""
import logging
import sys

import uvicorn

from rnrsvp.core.config import settings
from rnrsvp.core.database import DatabaseUnavailable, engine, wait_for_database

logger = logging.getLogger(__name__)


def main():
    """Wait for the database, then serve. Exits with status 1 if it never answers."""
    try:
        wait_for_database(
            engine,
            attempts=settings.db_connect_attempts,
            delay=settings.db_connect_delay_seconds,
        )
    except DatabaseUnavailable as e:
        logger.critical(f"Giving up on startup: {e}")
        sys.exit(1)

    uvicorn.run("rnrsvp.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
