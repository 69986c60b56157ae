#!/usr/bin/env python3
"""Close tenders whose scheduled date has passed.

Meant to run once a day from cron or a scheduled job. Reading a tender never
closes it, so without this job past tenders keep their open/full status.

Usage:
    python scripts/close_expired_tenders.py               # as of today
    python scripts/close_expired_tenders.py 2026-10-19    # as of a given day
"""

import asyncio
import sys
from datetime import date

import logfire

from crew.config import Settings
from crew.domain.service import ExpirySweepResult, TenderStore
from crew.util.di.container import create_container
from crew.util.logging import setup_logging
from crew.util.observability import configure_logfire


async def close_expired(as_of: date) -> ExpirySweepResult:
    """Run the closure sweep."""
    container = create_container()
    try:
        async with container() as request_container:
            tender_store = await request_container.get(TenderStore)
            return await tender_store.close_expired(as_of)
    finally:
        await container.close()


def main() -> int:
    """Close expired tenders and log the result to Logfire.

    Exits with 1 when some tenders could not be closed. They stay open and
    are retried by the next run.
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    as_of = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()

    try:
        result = asyncio.run(close_expired(as_of))
    except Exception as e:
        logfire.error(
            "Closure sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    logfire.info(
        "Closure sweep finished",
        as_of=as_of.isoformat(),
        closed=len(result.closed),
        failed=[str(tender_id) for tender_id in result.failed],
    )
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
