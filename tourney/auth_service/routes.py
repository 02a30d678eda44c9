"""
Authentication service route handlers.

Provides routes for:
- User registration
- User login

Token logic lives in `auth_service.utils`; the account rules live in
`auth_service.accounts`.
"""

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from tourney.auth_service.accounts import login_user, register_user
from tourney.errors import InvalidInput, is_encodable

auth_bp = Blueprint("auth", __name__)


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    # Headers and bodies carry passwords and tokens; only the route is logged.
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Auth] Response {response.status}")
    return response


def _credentials() -> Tuple[str, str]:
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise InvalidInput("Email and password required")
    if not is_encodable(email) or not is_encodable(password):
        raise InvalidInput("Email and password must be valid text")
    return email, password


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user.

    Expects a JSON body with:
    - email (str): Unique, case-sensitive.
    - password (str)

    Returns:
        200: {"message": "Registered"}
        400: Missing fields, or the email is already registered.
        500: Database error.
    """
    email, password = _credentials()
    register_user(current_app.users, current_app.passwords, email, password)
    return jsonify({"message": "Registered"}), 200


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user and return a bearer token.

    Returns:
        200: {"token": "<jwt>"}
        400: Missing fields or invalid credentials.
        500: Database error.
    """
    email, password = _credentials()
    token = login_user(current_app.users, current_app.passwords, current_app.tokens, email, password)
    return jsonify({"token": token}), 200
