#!/usr/bin/env python
"""Script to manually trigger the assignment lifecycle sweep."""
import asyncio
import sys
from typing import Optional

from availability_engine.config import settings
from availability_engine.tasks.lifecycle_tasks import advance_assignments_task


async def run_sweep(today: Optional[str]):
    """Run the sweep in-process, without a worker."""
    print(f"Running lifecycle sweep for {today or 'today'}")
    print(f"  - Database: {settings.DATABASE_URL}")
    print(f"  - Scheduled every {settings.LIFECYCLE_SWEEP_INTERVAL_MINUTES} minutes")
    print()

    try:
        result = await advance_assignments_task(today)
        print("Sweep completed successfully!")
        print(f"Result: {result}")
    except Exception as e:
        print(f"Error: {e}")
        raise


if __name__ == "__main__":
    if len(sys.argv) > 2:
        print("Usage: python run_lifecycle_sweep.py [YYYY-MM-DD]")
        sys.exit(1)

    asyncio.run(run_sweep(sys.argv[1] if len(sys.argv) == 2 else None))
