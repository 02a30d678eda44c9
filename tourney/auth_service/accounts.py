"""
Account operations: registration and login.

These take their collaborators as arguments so the routes (and tests) decide
which store, hasher and token service are in play.
"""

import logging

from tourney.auth_service.passwords import PasswordService
from tourney.auth_service.utils import TokenService
from tourney.database.models import User
from tourney.errors import AuthenticationFailure, ValidationConflict


def register_user(users, passwords: PasswordService, email: str, password: str) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ValidationConflict: If the email is already registered. The store's
            unique index catches the case where two registrations race past
            the lookup.
        StorageFailure: If the database is unavailable.
    """
    if users.find_by_email(email) is not None:
        raise ValidationConflict("User exists")

    user = users.insert(email, passwords.hash(password))
    logging.info(f"[Auth] Registered user_id={user.user_id}")
    return user


def login_user(users, passwords: PasswordService, tokens: TokenService, email: str, password: str) -> str:
    """
    Check credentials and issue a bearer token.

    Raises:
        AuthenticationFailure: (400) for an unknown email or a wrong password;
            the two cases are indistinguishable to the caller.
    """
    user = users.find_by_email(email)
    if user is None:
        passwords.burn(password)
        ok = False
    else:
        ok = passwords.verify(password, user.password_hash)

    if not ok:
        logging.info("[Auth] Login rejected")
        raise AuthenticationFailure("Invalid credentials", status_code=400)

    return tokens.issue(user.user_id, user.email)
