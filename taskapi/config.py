import os

from sqlalchemy.engine import URL


def _env(key: str, fallback: str) -> str:
    # empty values count as unset
    return os.environ.get(key) or fallback


DB_HOST = _env("DB_HOST", "localhost")
DB_PORT = int(_env("DB_PORT", "5432"))
DB_USER = _env("DB_USER", "gouser")
DB_PASSWORD = _env("DB_PASSWORD", "gopass")
DB_NAME = _env("DB_NAME", "sandbox")

DB_POOL_SIZE = int(_env("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(_env("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = float(_env("DB_POOL_TIMEOUT", "30"))
DB_STATEMENT_TIMEOUT_MS = int(_env("DB_STATEMENT_TIMEOUT_MS", "5000"))

HOST = _env("HOST", "0.0.0.0")
PORT = int(_env("PORT", "8080"))
LOG_LEVEL = _env("LOG_LEVEL", "INFO")


def database_url(host=None, port=None, user=None, password=None, name=None) -> str:
    """Combine the connection settings into a single Postgres URL.

    Arguments left as None fall back to the module-level settings.
    """
    url = URL.create(
        "postgresql+psycopg2",
        username=user or DB_USER,
        password=password or DB_PASSWORD,
        host=host or DB_HOST,
        port=port or DB_PORT,
        database=name or DB_NAME,
    )
    return url.render_as_string(hide_password=False)


# A full DATABASE_URL (e.g. sqlite for local runs and tests) wins over the parts
DATABASE_URL = os.environ.get("DATABASE_URL") or database_url()
