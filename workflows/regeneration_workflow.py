"""DSR Regeneration Workflow.

Periodic sweep that renders every show flagged for regeneration:
1. List flagged shows
2. Render each show with its own activity call
3. Record a failed outcome for any show whose activity fails, and continue

A failed show keeps its flag, so the next sweep picks it up again.
"""

from dataclasses import dataclass
from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy
from temporalio.exceptions import ActivityError, ApplicationError

with workflow.unsafe.imports_passed_through():
    from activities.render import (
        list_pending_shows,
        render_show,
        RenderShowInput,
    )


@dataclass
class RegenerationSweepInput:
    """Input for the regeneration sweep.

    Attributes:
        render_timeout_seconds: start-to-close timeout per render
        maximum_attempts: Attempts per show before it is reported failed
    """
    render_timeout_seconds: int = 120
    maximum_attempts: int = 3


@workflow.defn
class DSRRegenerationWorkflow:
    """Renders the DSR of every show whose regeneration flag is set."""

    @workflow.run
    async def run(self, input: RegenerationSweepInput) -> dict:
        """Execute one sweep.

        Args:
            input: RegenerationSweepInput with timeouts and retry limits

        Returns:
            dict with rendered/failed counts and one outcome per show
        """
        pending = await workflow.execute_activity(
            list_pending_shows,
            start_to_close_timeout=timedelta(seconds=30),
        )
        workflow.logger.info(f"Regeneration sweep: {len(pending.show_ids)} shows flagged")

        retry_policy = RetryPolicy(
            maximum_attempts=input.maximum_attempts,
            initial_interval=timedelta(seconds=1),
            backoff_coefficient=2.0,
            non_retryable_error_types=["RecordNotFound"],
        )

        outcomes = []
        for show_id in pending.show_ids:
            try:
                result = await workflow.execute_activity(
                    render_show,
                    RenderShowInput(show_id=show_id),
                    start_to_close_timeout=timedelta(seconds=input.render_timeout_seconds),
                    retry_policy=retry_policy,
                )
            except ActivityError as e:
                cause = e.cause
                condition = cause.type if isinstance(cause, ApplicationError) and cause.type else type(cause).__name__
                workflow.logger.warning(f"DSR for show {show_id} failed: {condition}")
                outcomes.append({
                    "show_id": show_id,
                    "status": "FAILED",
                    "condition": condition,
                    "error": str(cause) if cause else str(e),
                })
                continue

            outcomes.append({
                "show_id": show_id,
                "status": "SUCCESS",
                "document_path": result.document_path,
                "content_hash": result.content_hash,
            })

        rendered = sum(1 for o in outcomes if o["status"] == "SUCCESS")
        workflow.logger.info(f"Regeneration sweep complete: {rendered}/{len(outcomes)} rendered")

        return {
            "rendered": rendered,
            "failed": len(outcomes) - rendered,
            "outcomes": outcomes,
        }
