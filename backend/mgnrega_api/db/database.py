from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from mgnrega_api.core.config import settings

Base = declarative_base()


def normalize_database_url(url):
    # psycopg3 driver instead of psycopg2
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url.replace("postgresql://", "postgresql+psycopg://", 1)


def build_engine(url, ssl_required=False, connect_timeout=10):
    url = normalize_database_url(url)
    if not url.startswith("postgresql"):
        return create_engine(url, pool_pre_ping=True, future=True)

    connect_args = {"connect_timeout": connect_timeout}
    if ssl_required:
        connect_args["sslmode"] = "require"
    return create_engine(
        url,
        pool_size=20,
        max_overflow=40,
        pool_pre_ping=True,
        connect_args=connect_args,
        future=True,
    )


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


@lru_cache
def get_engine():
    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set when APP_ENV=production")
    return build_engine(
        settings.DATABASE_URL,
        ssl_required=settings.DB_SSL_REQUIRED,
        connect_timeout=settings.DB_CONNECT_TIMEOUT,
    )


@lru_cache
def get_session_factory():
    return make_session_factory(get_engine())
