"""
PostgreSQL-backed stores.

- UserStore: the credential store (users table).
- TournamentStore: tournaments plus their ordered participant lists.
- SubscriberStore: newsletter emails.

Every public method opens its own connection and runs in a single
transaction. Driver errors surface as StorageFailure; unique-key clashes
surface as ValidationConflict.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

import psycopg2
import psycopg2.errors

from tourney.database.db_connection import get_db
from tourney.database.models import Tournament, User
from tourney.errors import StorageFailure, ValidationConflict

TOURNAMENT_SELECT = """
    SELECT t.tournament_id, t.name, t.description, t.owner_id,
           COALESCE(
               array_agg(p.user_id ORDER BY p.participant_id)
                   FILTER (WHERE p.user_id IS NOT NULL),
               '{}'::int[]
           ) AS participant_ids
    FROM tournaments t
    LEFT JOIN tournament_participants p ON p.tournament_id = t.tournament_id
"""


class PostgresStore:
    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url

    @contextmanager
    def _cursor(self):
        """Yield a cursor inside one transaction; commit on success, roll back on error."""
        conn = None
        try:
            conn = get_db(self.database_url)
            with conn:
                with conn.cursor() as cur:
                    yield cur
        except psycopg2.errors.UniqueViolation:
            raise
        except (psycopg2.Error, RuntimeError) as e:
            logging.exception(f"[DB] {type(self).__name__} operation failed")
            raise StorageFailure() from e
        finally:
            if conn is not None:
                conn.close()


class UserStore(PostgresStore):

    def find_by_email(self, email: str) -> Optional[User]:
        with self._cursor() as cur:
            cur.execute(
                "SELECT user_id, email, password_hash FROM users WHERE email = %s;",
                (email,),
            )
            row = cur.fetchone()
        if not row:
            return None
        return User(row["user_id"], row["email"], row["password_hash"])

    def insert(self, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            ValidationConflict: If the email is already registered.
        """
        try:
            with self._cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO users (email, password_hash)
                    VALUES (%s, %s)
                    RETURNING user_id;
                    """,
                    (email, password_hash),
                )
                row = cur.fetchone()
        except psycopg2.errors.UniqueViolation:
            raise ValidationConflict("User exists")
        return User(row["user_id"], email, password_hash)

    def emails_by_id(self, user_ids: Iterable[int]) -> Dict[int, str]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        with self._cursor() as cur:
            cur.execute(
                "SELECT user_id, email FROM users WHERE user_id = ANY(%s);",
                (ids,),
            )
            rows = cur.fetchall()
        return {row["user_id"]: row["email"] for row in rows}


class TournamentStore(PostgresStore):

    @staticmethod
    def _from_row(row) -> Tournament:
        return Tournament(
            tournament_id=row["tournament_id"],
            name=row["name"],
            description=row["description"],
            owner_id=row["owner_id"],
            participant_ids=list(row["participant_ids"] or []),
        )

    def _fetch(self, cur, tournament_id: int) -> Optional[Tournament]:
        cur.execute(
            TOURNAMENT_SELECT + " WHERE t.tournament_id = %s GROUP BY t.tournament_id;",
            (tournament_id,),
        )
        row = cur.fetchone()
        return self._from_row(row) if row else None

    def create(self, name: str, description: str, owner_id: int) -> Tournament:
        """Insert the tournament and its owner as first participant in one transaction."""
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO tournaments (name, description, owner_id)
                VALUES (%s, %s, %s)
                RETURNING tournament_id;
                """,
                (name, description, owner_id),
            )
            tournament_id = cur.fetchone()["tournament_id"]
            cur.execute(
                "INSERT INTO tournament_participants (tournament_id, user_id) VALUES (%s, %s);",
                (tournament_id, owner_id),
            )
        return Tournament(tournament_id, name, description, owner_id, [owner_id])

    def get(self, tournament_id: int) -> Optional[Tournament]:
        with self._cursor() as cur:
            return self._fetch(cur, tournament_id)

    def list_all(self) -> List[Tournament]:
        with self._cursor() as cur:
            cur.execute(TOURNAMENT_SELECT + " GROUP BY t.tournament_id ORDER BY t.tournament_id;")
            rows = cur.fetchall()
        return [self._from_row(row) for row in rows]

    def add_participant(self, tournament_id: int, user_id: int) -> Optional[Tournament]:
        """
        Add user_id to the participant set. Safe under concurrent joins: the
        unique (tournament_id, user_id) key makes the insert a set-add.

        Returns:
            The tournament after the add, or None if it does not exist.
        """
        with self._cursor() as cur:
            if self._fetch(cur, tournament_id) is None:
                return None
            cur.execute(
                """
                INSERT INTO tournament_participants (tournament_id, user_id)
                VALUES (%s, %s)
                ON CONFLICT (tournament_id, user_id) DO NOTHING;
                """,
                (tournament_id, user_id),
            )
            return self._fetch(cur, tournament_id)


class SubscriberStore(PostgresStore):

    def exists(self, email: str) -> bool:
        with self._cursor() as cur:
            cur.execute("SELECT 1 FROM subscribers WHERE email = %s;", (email,))
            return cur.fetchone() is not None

    def insert(self, email: str) -> None:
        try:
            with self._cursor() as cur:
                cur.execute("INSERT INTO subscribers (email) VALUES (%s);", (email,))
        except psycopg2.errors.UniqueViolation:
            raise ValidationConflict("Email already subscribed")
