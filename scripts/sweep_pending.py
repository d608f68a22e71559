"""Regenerate every flagged DSR without Temporal.

Runs the regeneration sweep inline against the configured data directory
and prints one line per show.
"""

import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.config import get_settings
from core.observability.logging import configure_logging
from document_service import build_service


def main():
    """Entry point."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    outcomes = build_service(settings).sweep_pending_renders()

    print("\n=== REGENERATION SWEEP ===")
    for outcome in outcomes:
        if outcome.succeeded:
            print(f"  ✓ {outcome.show_id}: {outcome.document.storage_uri}")
        else:
            print(f"  ✗ {outcome.show_id}: {outcome.condition} - {outcome.error}")
    rendered = sum(1 for o in outcomes if o.succeeded)
    print(f"  {rendered} rendered, {len(outcomes) - rendered} failed")
    print("==========================\n")

    return 0 if rendered == len(outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
