import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from mgnrega_api.api.rate_limit import rate_limit_middleware
from mgnrega_api.api.routes import router as api_router
from mgnrega_api.core.config import settings
from mgnrega_api.db.database import get_engine, get_session_factory
from mgnrega_api.services.bootstrap import BootstrapError, bootstrap_database, check_connection
from mgnrega_api.services.cache import TTLCache
from mgnrega_api.services.rate_limiter import FixedWindowRateLimiter
from mgnrega_api.services.refresh_worker import build_scheduler

logger = logging.getLogger("mgnrega_api")


def configure_logging(level=None):
    logging.basicConfig(
        level=getattr(logging, level or settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def prepare_storage(state):
    """Connectivity probe plus bootstrap; runs once per app."""
    if state.bootstrapped:
        return
    engine = state.engine or get_engine()
    check_connection(engine)
    bootstrap_database(engine, state.session_factory)
    state.bootstrapped = True


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state
    scheduler = None
    if state.run_startup:
        # BootstrapError propagates: the server must not start on a broken schema
        prepare_storage(state)
        scheduler = build_scheduler(state.session_factory, hours=settings.REFRESH_CRON_HOURS)
        scheduler.start()
        logger.info("Refresh job scheduled (hour=%s)", settings.REFRESH_CRON_HOURS)
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)


def create_app(
    session_factory=None,
    engine=None,
    cache=None,
    rate_limiter=None,
    static_dir=None,
    run_startup=True,
):
    configure_logging()
    app = FastAPI(title="MGNREGA District Performance API", version="1.0", lifespan=lifespan)

    app.state.engine = engine
    app.state.session_factory = session_factory or get_session_factory()
    app.state.cache = cache or TTLCache(ttl=settings.CACHE_TTL_SECONDS)
    app.state.rate_limiter = rate_limiter or FixedWindowRateLimiter(
        limit=settings.RATE_LIMIT,
        window_seconds=settings.RATE_WINDOW_SECONDS,
        max_clients=settings.RATE_LIMIT_MAX_CLIENTS,
    )
    app.state.run_startup = run_startup
    app.state.bootstrapped = False

    app.middleware("http")(rate_limit_middleware)
    # CORS middleware, outermost so 429s carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Static frontend, mounted last so /api routes win
    static_dir = static_dir or settings.STATIC_DIR
    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; serving API only", static_dir)

    return app


app = create_app()


def run(application=None):
    import uvicorn

    application = application or app
    try:
        prepare_storage(application.state)
    except BootstrapError:
        # already logged by bootstrap_database
        sys.exit(1)

    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(application, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
