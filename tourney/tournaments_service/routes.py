"""
Tournaments service routes: create, list and join tournaments.
"""

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from tourney.auth_service.utils import verify_token_from_request
from tourney.errors import InvalidInput
from tourney.tournaments_service.membership import (
    create_tournament,
    join_tournament,
    list_tournaments,
    resolve_emails,
)

tournaments_bp = Blueprint("tournaments", __name__)


@tournaments_bp.before_request
def before_request() -> None:
    logging.info(f"[Tournaments] Incoming {request.method} {request.path}")


@tournaments_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Tournaments] Response {response.status}")
    return response


def _text_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInput(f"{key} must be a string")
    return value


@tournaments_bp.route("", methods=["POST"])
def create() -> Tuple[Response, int]:
    """
    Create a tournament owned by the caller.

    Requires Authorization header: Bearer <token>

    Expects JSON: {"name": str, "description": str}

    Returns:
        200: The new tournament; participants == [owner].
        400: A field is not a string.
        401: Missing or invalid token.
    """
    caller, err, code = verify_token_from_request()
    if err:
        return err, code

    data: Dict[str, Any] = request.get_json(silent=True) or {}
    tournament = create_tournament(
        current_app.tournaments,
        _text_field(data, "name"),
        _text_field(data, "description"),
        caller,
    )
    return jsonify(tournament.to_dict()), 200


@tournaments_bp.route("", methods=["GET"])
def list_all() -> Tuple[Response, int]:
    """
    List every tournament with owner and participants resolved to emails.
    """
    tournaments = list_tournaments(current_app.tournaments)
    emails = resolve_emails(current_app.users, tournaments)
    return jsonify([t.to_dict(emails) for t in tournaments]), 200


@tournaments_bp.route("/<int:tournament_id>/join", methods=["POST"])
def join(tournament_id: int) -> Tuple[Response, int]:
    """
    Join a tournament. Joining again is a no-op.

    Requires Authorization header: Bearer <token>

    Returns:
        200: The tournament's current state.
        401: Missing or invalid token.
        404: Unknown tournament id.
    """
    caller, err, code = verify_token_from_request()
    if err:
        return err, code

    tournament = join_tournament(current_app.tournaments, tournament_id, caller)
    return jsonify(tournament.to_dict()), 200
