"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import connect, transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Addresses: owned by people through HOME_ADDRESS / BUSINESS_ADDRESS
CREATE TABLE IF NOT EXISTS addresses (
    id              BIGSERIAL PRIMARY KEY,
    street_address  VARCHAR(255),
    address2        VARCHAR(255),
    city            VARCHAR(100),
    state           VARCHAR(100),
    postcode        VARCHAR(20),
    county          VARCHAR(100),
    region          VARCHAR(20),
    country         VARCHAR(100)
);

-- People: spouse and parent are self-references
CREATE TABLE IF NOT EXISTS people (
    id               BIGSERIAL PRIMARY KEY,
    first_name       VARCHAR(255) NOT NULL,
    last_name        VARCHAR(255) NOT NULL,
    dob              TIMESTAMP NOT NULL,
    salary           NUMERIC(15,2) DEFAULT 0,
    email            VARCHAR(255),
    home_address     BIGINT REFERENCES addresses(id),
    business_address BIGINT REFERENCES addresses(id),
    spouse           BIGINT REFERENCES people(id),
    parent           BIGINT REFERENCES people(id)
);

CREATE INDEX IF NOT EXISTS idx_people_parent ON people(parent);
"""


def create_tables(conn) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with transaction(conn):
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    connection = connect()
    try:
        create_tables(connection)
    finally:
        connection.close()
    print("Database schema created successfully.")
