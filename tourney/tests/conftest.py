import dataclasses

import pytest

from tourney.database.models import Tournament, User
from tourney.errors import ValidationConflict
from tourney.gateway.server import create_app


class InMemoryUserStore:
    def __init__(self):
        self.users = {}
        self._next_id = 1

    def find_by_email(self, email):
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def insert(self, email, password_hash):
        if self.find_by_email(email) is not None:
            raise ValidationConflict("User exists")
        user = User(self._next_id, email, password_hash)
        self.users[user.user_id] = user
        self._next_id += 1
        return user

    def emails_by_id(self, user_ids):
        return {uid: self.users[uid].email for uid in set(user_ids) if uid in self.users}


class InMemoryTournamentStore:
    def __init__(self):
        self.rows = {}
        self._next_id = 1
        self.writes = 0

    @staticmethod
    def _copy(t):
        return dataclasses.replace(t, participant_ids=list(t.participant_ids))

    def create(self, name, description, owner_id):
        t = Tournament(self._next_id, name, description, owner_id, [owner_id])
        self.rows[t.tournament_id] = t
        self._next_id += 1
        self.writes += 1
        return self._copy(t)

    def get(self, tournament_id):
        t = self.rows.get(tournament_id)
        return self._copy(t) if t else None

    def list_all(self):
        return [self._copy(t) for t in self.rows.values()]

    def add_participant(self, tournament_id, user_id):
        t = self.rows.get(tournament_id)
        if t is None:
            return None
        if user_id not in t.participant_ids:
            t.participant_ids.append(user_id)
            self.writes += 1
        return self._copy(t)


class InMemorySubscriberStore:
    def __init__(self):
        self.emails = []

    def exists(self, email):
        return email in self.emails

    def insert(self, email):
        if email in self.emails:
            raise ValidationConflict("Email already subscribed")
        self.emails.append(email)


@pytest.fixture
def app():
    app = create_app("testing")
    app.users = InMemoryUserStore()
    app.tournaments = InMemoryTournamentStore()
    app.subscribers = InMemorySubscriberStore()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    return app.users


@pytest.fixture
def tournaments(app):
    return app.tournaments


@pytest.fixture
def auth_header(app):
    """Build an Authorization header for an arbitrary user id/email."""
    def _make(user_id=1, email="a@x.com"):
        return {"Authorization": f"Bearer {app.tokens.issue(user_id, email)}"}
    return _make


@pytest.fixture
def mock_db(mocker):
    """
    Mocks the database connection and cursor used by the stores.
    """
    mock_conn = mocker.MagicMock()
    mock_cursor = mocker.MagicMock()

    # Setup the context manager for connection
    mock_conn.__enter__.return_value = mock_conn
    mock_conn.__exit__.return_value = None

    # Setup the context manager for cursor
    mock_cursor.__enter__.return_value = mock_cursor
    mock_cursor.__exit__.return_value = None

    mock_conn.cursor.return_value = mock_cursor

    mocker.patch("tourney.database.stores.get_db", return_value=mock_conn)

    return mock_conn, mock_cursor
