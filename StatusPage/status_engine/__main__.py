"""
Command-line entrypoint: render the public status for a JSON input file.

    python -m status_engine data/sample_status.json
    SAE_DATA_FILE=data/sample_status.json python -m status_engine
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

from status_engine.config import settings
from status_engine.console import render_snapshot
from status_engine.loader import SnapshotLoadError, load_status_input
from status_engine.snapshot import build_snapshot

logger = logging.getLogger("status_engine")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="status_engine",
        description="Derive and print service and overall status from a JSON status input.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.data_file,
        help="status input file (defaults to SAE_DATA_FILE)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.path is None:
        parser.error("no input file given and SAE_DATA_FILE is not set")

    try:
        data = load_status_input(args.path)
    except SnapshotLoadError as exc:
        logger.error("%s", exc)
        return 1

    snapshot = build_snapshot(
        data.services,
        data.incidents,
        data.groups,
        generated_at=datetime.now(timezone.utc),
        imminent_maintenance=settings.imminent_maintenance_statuses,
    )
    render_snapshot(snapshot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
