"""
PostgreSQL connection helper.
Provides get_db() for use by the stores.
"""

import os
import logging
from typing import Optional

import psycopg2
from psycopg2.extras import DictCursor
from dotenv import load_dotenv

# Load .env variables from the project root
load_dotenv()


def get_db(database_url: Optional[str] = None):
    """
    Returns a new psycopg2 connection with dictionary-based row access.

    Usage:
        conn = get_db(url)
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(...)
        finally:
            conn.close()

    Args:
        database_url (str, optional): DSN to connect to. Falls back to the
            DATABASE_URL environment variable.

    Returns:
        psycopg2.extensions.connection: A connection object with DictCursor factory.

    Raises:
        RuntimeError: If no database URL is configured.
        psycopg2.Error: If connection fails.
    """
    url = database_url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set. Please set the environment variable.")

    try:
        conn = psycopg2.connect(url)
        # Rows come back as dictionaries (e.g., {"user_id": 1, "email": "..."})
        conn.cursor_factory = DictCursor
        return conn
    except psycopg2.Error:
        logging.exception("Error connecting to database")
        raise
