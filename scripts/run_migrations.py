#!/usr/bin/env python3
"""Upgrade the database schema, logging failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f9a7d2e40
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from crew.config import Settings
from crew.util.logging import setup_logging
from crew.util.observability import configure_logfire


def main() -> int:
    """Upgrade to the requested revision (default: head)."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    target = sys.argv[1] if len(sys.argv) > 1 else "head"

    try:
        with logfire.span("run_migrations", target=target):
            command.upgrade(Config("alembic.ini"), target)
        logfire.info("Database schema upgraded", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            target=target,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the deploy fails instead of starting on a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
