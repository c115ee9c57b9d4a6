#!/usr/bin/env python3
"""Recompute every thread's reply count from its live comments.

Run on demand or from a scheduler:

    python scripts/reconcile_reply_counts.py --batch-size 500
"""

import argparse
import asyncio
import sys

import logfire

from discuss.application.usecase.maintenance import (
    ReconcileReplyCountsRequest,
    ReconcileReplyCountsUseCase,
)
from discuss.config import Settings
from discuss.util.di.container import create_container
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire


async def run(batch_size: int) -> int:
    """Run one reconciliation pass.

    Returns:
        Process exit code: 0 if every thread was checked, 1 if some were skipped
    """
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ReconcileReplyCountsUseCase)
            summary = await use_case.execute(
                ReconcileReplyCountsRequest(batch_size=batch_size)
            )
    finally:
        await container.close()

    print(
        f"checked={summary.checked} corrected={summary.corrected} "
        f"skipped={summary.skipped}"
    )
    return 1 if summary.skipped else 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--batch-size", type=int, default=500)
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        return asyncio.run(run(args.batch_size))
    except Exception as e:
        logfire.error(
            "Reply count reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
