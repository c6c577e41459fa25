"""Database URL helpers for Alembic migrations.

Kept apart from env.py so they can be tested without triggering
alembic.context at import time.
"""

from __future__ import annotations

import os
from urllib.parse import quote_plus, urlparse, urlunparse

from psycopg2.extensions import parse_dsn

_DRIVER_PREFIX = "postgresql+psycopg2://"


def libpq_dsn_to_url(dsn: str) -> str:
    """Convert a libpq key=value DSN to a SQLAlchemy URL.

    host=/path (unix socket) becomes a ?host= query parameter;
    a TCP host becomes HOST:PORT.
    """
    params = parse_dsn(dsn)

    if not params.get("password"):
        db_password = os.environ.get("DB_PASSWORD", "")
        if db_password:
            params["password"] = db_password

    user = quote_plus(params.get("user", ""))
    password = quote_plus(params.get("password", ""))
    dbname = quote_plus(params.get("dbname", ""))
    host = params.get("host", "localhost")
    port = params.get("port", "5432")

    if host.startswith("/"):
        return f"{_DRIVER_PREFIX}{user}:{password}@/{dbname}?host={quote_plus(host)}"
    return f"{_DRIVER_PREFIX}{user}:{password}@{host}:{port}/{dbname}"


def get_database_url() -> str:
    """Read DATABASE_URL and normalise it for SQLAlchemy + psycopg2."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is required to run migrations")
    if "://" not in url:
        return libpq_dsn_to_url(url)

    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            url = _DRIVER_PREFIX + url[len(scheme):]
            break

    db_password = os.environ.get("DB_PASSWORD", "")
    parsed = urlparse(url)
    if db_password and not parsed.password:
        netloc = f"{quote_plus(parsed.username or '')}:{quote_plus(db_password)}@{parsed.hostname}"
        if parsed.port:
            netloc += f":{parsed.port}"
        url = urlunparse(parsed._replace(netloc=netloc))
    return url
