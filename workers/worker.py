"""Worker for the DSR regeneration sweep.

Listens on the DSR task queue and executes the regeneration workflow and
its rendering activities.

Run with --queue <name> to poll a queue other than DSR_TASK_QUEUE.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from temporalio.worker import Worker

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.config import get_settings
from core.observability.logging import configure_logging, get_logger
from temporal_client import get_temporal_client
from workflows.regeneration_workflow import DSRRegenerationWorkflow
from activities.render import list_pending_shows, render_show


logger = get_logger(__name__)

WORKFLOWS = [DSRRegenerationWorkflow]
ACTIVITIES = [list_pending_shows, render_show]


async def run_worker(queue: str = None):
    """Start a worker listening on the task queue.

    Args:
        queue: Task queue to poll (defaults to DSR_TASK_QUEUE)

    Raises:
        Exception: If connection to Temporal fails
    """
    settings = get_settings()
    task_queue = queue or settings.task_queue
    client = await get_temporal_client(settings)
    logger.info(f"Connected to Temporal: {client.namespace}")

    worker = Worker(
        client,
        task_queue=task_queue,
        workflows=WORKFLOWS,
        activities=ACTIVITIES,
    )

    logger.info(f"Worker created for queue '{task_queue}':")
    logger.info(f"  - Workflows: {len(WORKFLOWS)}")
    logger.info(f"  - Activities: {len(ACTIVITIES)}")
    logger.info("Worker running... (Ctrl+C to stop)")

    try:
        await worker.run()
    except Exception as e:
        logger.exception(f"Worker error: {e}")
        raise


def main():
    """Entry point for worker with CLI args."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="DSR Generator Temporal Worker")
    parser.add_argument(
        "--queue", "-q",
        default=settings.task_queue,
        help=f"Task queue to poll (default: {settings.task_queue})"
    )
    args = parser.parse_args()

    configure_logging(level=settings.log_level, json_format=settings.log_json)
    try:
        asyncio.run(run_worker(queue=args.queue))
    except KeyboardInterrupt:
        logger.info("Worker interrupted by user")


if __name__ == "__main__":
    main()
