# backend/mgnrega_api/services/refresh_worker.py
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from mgnrega_api.db.repository import list_district_codes, upsert_performance
from mgnrega_api.services.data_generator import current_period, generate_district_data
from mgnrega_api.services.district_directory import MAHARASHTRA_DISTRICTS

logger = logging.getLogger("refresh")

REFRESH_JOB_ID = "refresh_performance"


def run_refresh_once(session_factory, now=None):
    """Regenerate and upsert the current month for every district.

    Never raises: a failed run is logged and the next scheduled run retries.
    Returns the number of districts refreshed.
    """
    logger.info("Running scheduled data fetch...")
    month, year = current_period(now)
    try:
        # closing the session discards anything left uncommitted
        with session_factory() as session:
            codes = list_district_codes(session) or [d["code"] for d in MAHARASHTRA_DISTRICTS]
            for code in codes:
                upsert_performance(session, code, month, year, generate_district_data(code, month, year))
            session.commit()
    except Exception:
        logger.exception("Error in scheduled data fetch")
        return 0

    logger.info("Data fetch completed: %d districts refreshed for %02d/%d", len(codes), month + 1, year)
    return len(codes)


def build_scheduler(session_factory, hours="*/6"):
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        run_refresh_once,
        CronTrigger(hour=hours, minute=0),
        args=[session_factory],
        id=REFRESH_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return scheduler
