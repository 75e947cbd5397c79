#!/usr/bin/env python3
"""
Create the FamilyMeal schema and seed the moment and tag catalog.

Usage:
    python scripts/init_databases.py            # create missing tables, seed
    python scripts/init_databases.py --reset    # drop everything first
"""

import argparse
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from domain.models.database import Base, engine, init_database

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("familymeal.init_databases")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the FamilyMeal database")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args(argv)

    logger.info("Initializing database at %s", engine.url.render_as_string(hide_password=True))
    try:
        if args.reset:
            Base.metadata.drop_all(bind=engine)
            logger.info("Dropped existing tables")
        init_database()
    except Exception:
        logger.exception("Failed to initialize database")
        return 1

    tables = inspect(engine).get_table_names()
    logger.info("Database ready with %d tables: %s", len(tables), ", ".join(sorted(tables)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
