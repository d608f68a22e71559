"""Generate the blank DSR template.

Writes a 3-page US Letter template whose headings and field labels come
from the layout descriptor, into the configured templates directory.
"""

import argparse
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.config import get_settings
from core.observability.logging import configure_logging, get_logger
from dsr_renderer import build_dsr_template, load_layout


logger = get_logger(__name__)


def main():
    """Entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create the blank DSR template")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=settings.templates_dir / settings.template_name,
        help="Where to write the template (default: <data>/templates/<template name>)"
    )
    parser.add_argument(
        "--layout",
        type=Path,
        default=settings.layout_path,
        help="Layout descriptor JSON (default: packaged layout)"
    )
    args = parser.parse_args()

    configure_logging(level=settings.log_level, json_format=settings.log_json)

    layout = load_layout(args.layout)
    data = build_dsr_template(layout)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(data)
    logger.info(f"✓ DSR template written to {args.output} ({len(data)} bytes, {layout.page_count} pages)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
