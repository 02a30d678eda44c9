"""
Create the database schema.

Safe to run repeatedly: every statement is CREATE ... IF NOT EXISTS.

Usage:
    python -m tourney.database.init_db
"""

import logging
import sys

import psycopg2

from tourney.database.db_connection import get_db

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id       SERIAL PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS tournaments (
    tournament_id SERIAL PRIMARY KEY,
    name          TEXT NOT NULL DEFAULT '',
    description   TEXT NOT NULL DEFAULT '',
    owner_id      INTEGER NOT NULL REFERENCES users (user_id),
    created_at    TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- participant_id order is join order
CREATE TABLE IF NOT EXISTS tournament_participants (
    participant_id BIGSERIAL PRIMARY KEY,
    tournament_id  INTEGER NOT NULL REFERENCES tournaments (tournament_id) ON DELETE CASCADE,
    user_id        INTEGER NOT NULL REFERENCES users (user_id),
    joined_at      TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    UNIQUE (tournament_id, user_id)
);

CREATE TABLE IF NOT EXISTS subscribers (
    subscriber_id SERIAL PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


def init_db(database_url: str = None) -> None:
    """Apply SCHEMA in a single transaction."""
    conn = get_db(database_url)
    try:
        with conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA)
    finally:
        conn.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")
    try:
        init_db()
    except (psycopg2.Error, RuntimeError) as e:
        logging.error(f"Schema setup FAILED: {e}")
        sys.exit(1)
    logging.info("Schema is up to date.")
