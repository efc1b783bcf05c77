"""
Seed the configured database with the default admin and sample vehicles.

Usage:
    python seed.py             # clear tables, then seed
    python seed.py --no-reset  # only add missing data
"""

import argparse
import logging

from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app.services.seed_loader import run_all

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the vehicle sales database")
    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Keep existing rows and only add the default admin/sample vehicles when missing",
    )
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        result = run_all(db, reset=not args.no_reset)
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()

    logger.info(
        f"Seeding completed: admin '{result['admin']}', {result['vehicles_created']} vehicles created"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
