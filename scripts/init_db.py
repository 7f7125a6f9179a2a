#!/usr/bin/env python3
"""
Standalone database initialization script
Creates every KitchenSathi table on the configured DATABASE_URL
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def main() -> int:
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError

    from app.config import settings
    from domain.models.database import engine, init_database

    logger.info("=" * 60)
    logger.info(f"Initializing {settings.app_name} database...")
    logger.info("=" * 60)

    try:
        init_database()
    except SQLAlchemyError as e:
        logger.error(f"✗ Failed to initialize database: {e}")
        return 1

    tables = inspect(engine).get_table_names()
    logger.info(f"✓ {len(tables)} tables ready: {', '.join(sorted(tables))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
