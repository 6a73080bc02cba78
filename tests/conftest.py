"""
Shared fixtures: an in-memory SQLite store behind the same DB-API surface
the repositories use with psycopg2 (``%s`` placeholders, context-managed
cursors, ``connection.Error``).
"""

import sqlite3
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from models.address import Address
from models.person import Person
from models.region import Region
from repositories.address_repo import AddressRepository
from repositories.people_repo import PeopleRepository

SQLITE_SCHEMA = """
CREATE TABLE addresses (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    street_address  TEXT,
    address2        TEXT,
    city            TEXT,
    state           TEXT,
    postcode        TEXT,
    county          TEXT,
    region          TEXT,
    country         TEXT
);
CREATE TABLE people (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name       TEXT NOT NULL,
    last_name        TEXT NOT NULL,
    dob              TIMESTAMP NOT NULL,
    salary           DECIMAL DEFAULT 0,
    email            TEXT,
    home_address     INTEGER REFERENCES addresses(id),
    business_address INTEGER REFERENCES addresses(id),
    spouse           INTEGER REFERENCES people(id),
    parent           INTEGER REFERENCES people(id)
);
"""

sqlite3.register_adapter(Decimal, str)
sqlite3.register_adapter(datetime, lambda d: d.isoformat(" "))
sqlite3.register_converter("TIMESTAMP", lambda b: datetime.fromisoformat(b.decode()))
sqlite3.register_converter("DECIMAL", lambda b: Decimal(b.decode()))


class _Cursor:
    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor

    def execute(self, sql, params=()):
        self._cursor.execute(sql.replace("%s", "?"), tuple(params))
        return self

    def fetchone(self):
        return self._cursor.fetchone()

    @property
    def description(self):
        return self._cursor.description

    @property
    def rowcount(self):
        return self._cursor.rowcount

    def __iter__(self):
        return iter(self._cursor)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._cursor.close()


class SqliteStore:
    """psycopg2-shaped wrapper around a sqlite3 connection."""

    Error = sqlite3.Error

    def __init__(self):
        self.raw = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
        self.raw.executescript(SQLITE_SCHEMA)

    def cursor(self) -> _Cursor:
        return _Cursor(self.raw.cursor())

    def commit(self):
        self.raw.commit()

    def rollback(self):
        self.raw.rollback()

    def close(self):
        self.raw.close()


@pytest.fixture
def store():
    conn = SqliteStore()
    yield conn
    conn.close()


@pytest.fixture
def people_repo(store):
    return PeopleRepository(store)


@pytest.fixture
def address_repo(store):
    return AddressRepository(store)


def tz(hours: int) -> timezone:
    return timezone(timedelta(hours=hours))


@pytest.fixture
def john():
    return Person("John", "Smith", datetime(1980, 11, 15, 15, 15, tzinfo=tz(-6)))


@pytest.fixture
def beale_street():
    return Address(
        street_address="123 Beale St.",
        address2="Apt. 1A",
        city="Wala Wala",
        state="WA",
        postcode="90210",
        country="United States",
        county="Fulton County",
        region=Region.WEST,
    )
