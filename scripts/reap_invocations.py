#!/usr/bin/env python3
"""Delete expired cooldown invocations.

PostgreSQL has no TTL index, so lapsed invocation rows accumulate until
reaped. Run periodically (cron, k8s CronJob):

    uv run python scripts/reap_invocations.py [--database-url postgresql://...]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from flagauth.application.services import CooldownTracker
from flagauth.config import get_settings
from flagauth.infrastructure.persistence.postgres.connection import create_pool
from flagauth.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from flagauth.main import configure_logging

logger = logging.getLogger("reap_invocations")


async def reap(database_url: str) -> int:
    pool = create_pool(database_url, min_size=1, max_size=1, name="reaper")
    await pool.open()
    try:
        tracker = CooldownTracker(create_uow_factory(pool))
        return await tracker.reap_expired()
    finally:
        await pool.close()


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Delete expired cooldown invocations")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="PostgreSQL connection URL (default: DATABASE_URL from settings)",
    )
    args = parser.parse_args()

    configure_logging(settings)
    removed = asyncio.run(reap(args.database_url))
    logger.info("Done, %d rows removed", removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
