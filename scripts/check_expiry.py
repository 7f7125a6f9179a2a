#!/usr/bin/env python3
"""
Run one grocery expiry alert pass.

Meant for cron, e.g. daily at 09:00:
    0 9 * * * cd /srv/kitchensathi && python scripts/check_expiry.py
"""

import sys
import argparse
import logging
from datetime import date
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("check_expiry")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Send grocery expiry alerts")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference date YYYY-MM-DD (default: today, UTC)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    from domain.models.database import SessionLocal, init_database
    from services.expiry_service import ExpiryService

    init_database()
    logger.info(f"Running expiry check for {args.date or 'today'}")
    db = SessionLocal()
    try:
        summary = ExpiryService.check_and_notify(db, today=args.date)
    finally:
        db.close()

    for key, value in summary.items():
        print(f"{key}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
