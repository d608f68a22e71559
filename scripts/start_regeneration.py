"""Start the DSR regeneration sweep on Temporal.

Either runs one sweep and prints the result, or (with --schedule) creates
a Temporal schedule that starts a sweep every DSR_SWEEP_INTERVAL_MINUTES.
"""

import argparse
import asyncio
import sys
import uuid
from datetime import timedelta
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from temporalio.client import (
    Schedule,
    ScheduleActionStartWorkflow,
    ScheduleIntervalSpec,
    ScheduleSpec,
)

from core.config import get_settings
from core.observability.logging import configure_logging, get_logger
from temporal_client import get_temporal_client
from workflows.regeneration_workflow import DSRRegenerationWorkflow, RegenerationSweepInput


logger = get_logger(__name__)

SCHEDULE_ID = "dsr-regeneration-sweep"


async def run_sweep_once() -> dict:
    """Start one sweep and wait for its result."""
    settings = get_settings()
    client = await get_temporal_client(settings)
    logger.info(f"Connected to Temporal: {client.namespace}")

    workflow_id = f"dsr-sweep-{uuid.uuid4().hex[:8]}"
    handle = await client.start_workflow(
        DSRRegenerationWorkflow.run,
        RegenerationSweepInput(),
        task_queue=settings.task_queue,
        id=workflow_id,
    )
    logger.info(f"Workflow started: {handle.id}")
    return await handle.result()


async def create_schedule(interval_minutes: int) -> str:
    """Create the recurring sweep schedule.

    Returns:
        The schedule id
    """
    settings = get_settings()
    client = await get_temporal_client(settings)

    await client.create_schedule(
        SCHEDULE_ID,
        Schedule(
            action=ScheduleActionStartWorkflow(
                DSRRegenerationWorkflow.run,
                RegenerationSweepInput(),
                id=f"{SCHEDULE_ID}-run",
                task_queue=settings.task_queue,
            ),
            spec=ScheduleSpec(
                intervals=[ScheduleIntervalSpec(every=timedelta(minutes=interval_minutes))],
            ),
        ),
    )
    logger.info(f"✓ Schedule {SCHEDULE_ID} created (every {interval_minutes} minutes)")
    return SCHEDULE_ID


def main():
    """Entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Start the DSR regeneration sweep")
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Create a recurring schedule instead of running one sweep"
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.sweep_interval_minutes,
        help=f"Schedule interval in minutes (default: {settings.sweep_interval_minutes})"
    )
    args = parser.parse_args()

    configure_logging(level=settings.log_level, json_format=settings.log_json)

    try:
        if args.schedule:
            asyncio.run(create_schedule(args.interval))
            return 0

        result = asyncio.run(run_sweep_once())
        print("\n=== WORKFLOW RESULT ===")
        print(f"  rendered: {result['rendered']}")
        print(f"  failed: {result['failed']}")
        for outcome in result["outcomes"]:
            print(f"  {outcome['show_id']}: {outcome['status']}")
        print("=======================\n")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
