"""
db/connection.py
----------------
Opens PostgreSQL connections and scopes transactions around them.

The repositories never commit or roll back on their own: the caller
owns the connection and decides where a unit of work begins and ends,
typically with::

    conn = connect()
    with transaction(conn):
        PeopleRepository(conn).save(person)
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2

from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)


def connect(dsn: str = DATABASE_URL):
    """
    Open a new database connection.

    Args:
        dsn: libpq connection string; defaults to ``config.DATABASE_URL``.

    Returns:
        A psycopg2 connection with autocommit disabled.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise
    logger.info("Database connection opened.")
    return conn


@contextmanager
def transaction(conn) -> Iterator:
    """
    Run a block as one transaction on ``conn``.

    Commits when the block finishes, rolls back and re-raises if it fails.
    Works with any DB-API 2.0 connection.
    """
    try:
        yield conn
        conn.commit()
    except Exception as e:
        conn.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise
