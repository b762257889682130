import os
from dotenv import load_dotenv, find_dotenv
from functools import lru_cache

# Load environment
load_dotenv(find_dotenv(usecwd=True))


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _local_database_url():
    user = os.getenv("DB_USER", "mgnrega_user")
    password = os.getenv("DB_PASSWORD", "")
    host = os.getenv("DB_HOST", "localhost")
    port = _env_int("DB_PORT", 5432)
    name = os.getenv("DB_NAME", "mgnrega_db")
    auth = f"{user}:{password}" if password else user
    return f"postgresql://{auth}@{host}:{port}/{name}"


@lru_cache
def get_settings():
    APP_ENV = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").strip().lower()
    IS_PRODUCTION = APP_ENV == "production"

    if IS_PRODUCTION:
        DATABASE_URL = os.getenv("DATABASE_URL")
    else:
        DATABASE_URL = os.getenv("LOCAL_DATABASE_URL") or _local_database_url()

    return type(
        "Settings",
        (),
        {
            "APP_ENV": APP_ENV,
            "IS_PRODUCTION": IS_PRODUCTION,
            "DATABASE_URL": DATABASE_URL,
            # Render-style hosted Postgres requires TLS
            "DB_SSL_REQUIRED": IS_PRODUCTION,
            "DB_CONNECT_TIMEOUT": _env_int("DB_CONNECT_TIMEOUT", 10),
            "HOST": os.getenv("HOST", "0.0.0.0"),
            "PORT": _env_int("PORT", 3000),
            "CACHE_TTL_SECONDS": _env_int("CACHE_TTL_SECONDS", 3600),
            "RATE_LIMIT": _env_int("RATE_LIMIT", 100),
            "RATE_WINDOW_SECONDS": _env_int("RATE_WINDOW_SECONDS", 60),
            "RATE_LIMIT_MAX_CLIENTS": _env_int("RATE_LIMIT_MAX_CLIENTS", 10000),
            "REFRESH_CRON_HOURS": os.getenv("REFRESH_CRON_HOURS", "*/6"),
            "STATIC_DIR": os.getenv("STATIC_DIR", "public"),
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        },
    )()


settings = get_settings()
