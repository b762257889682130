# backend/mgnrega_api/services/bootstrap.py
"""
One-time startup sequence: schema, district seed, seven months of history.

Unlike the refresh job, every write here is insert-if-absent, so running it
again never changes periods that already have data. Any failure is fatal.
"""
import logging

from sqlalchemy import text

from mgnrega_api.db.database import Base
from mgnrega_api.db.repository import (
    insert_performance_if_absent,
    list_district_codes,
    upsert_district_if_absent,
)
from mgnrega_api.models import performance  # noqa: F401  registers tables on Base
from mgnrega_api.services.data_generator import generate_district_data, trailing_periods
from mgnrega_api.services.district_directory import MAHARASHTRA_DISTRICTS

logger = logging.getLogger("bootstrap")

BACKFILL_MONTHS = 7


class BootstrapError(RuntimeError):
    pass


def check_connection(engine):
    """Log the database clock; failures are reported, not raised."""
    try:
        with engine.connect() as conn:
            now = conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
        logger.info("Database connected: %s", now)
        return True
    except Exception as e:
        logger.error("Database connection error: %s", e)
        return False


def bootstrap_database(engine, session_factory, now=None):
    try:
        Base.metadata.create_all(bind=engine)

        session = session_factory()
        try:
            seeded = sum(upsert_district_if_absent(session, d) for d in MAHARASHTRA_DISTRICTS)
            session.commit()
            logger.info("Seeded %d new districts", seeded)

            logger.info("Running initial data population...")
            inserted = 0
            periods = trailing_periods(BACKFILL_MONTHS, now)
            for code in list_district_codes(session):
                for month, year in periods:
                    data = generate_district_data(code, month, year)
                    inserted += insert_performance_if_absent(session, code, month, year, data)
            session.commit()
            logger.info("Initial data population complete: %d new records", inserted)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
    except Exception as e:
        logger.exception("Error initializing database")
        raise BootstrapError("Database initialization failed") from e

    logger.info("Database initialized successfully")
