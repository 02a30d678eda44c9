"""
Newsletter subscription route.
"""

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from tourney.errors import InvalidInput, ValidationConflict, is_encodable

subscribers_bp = Blueprint("subscribers", __name__)


@subscribers_bp.route("/subscribe", methods=["POST"])
def subscribe() -> Tuple[Response, int]:
    """
    Add an email to the newsletter list.

    Returns:
        201: {"message": "Subscribed successfully!"}
        400: Missing email, or already subscribed.
        500: Database error.
    """
    logging.info(f"[Subscribers] Incoming {request.method} {request.path}")
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    email = data.get("email")
    if not email or not isinstance(email, str):
        raise InvalidInput("Email is required")
    if not is_encodable(email):
        raise InvalidInput("Email must be valid text")

    subscribers = current_app.subscribers
    if subscribers.exists(email):
        raise ValidationConflict("Email already subscribed")
    subscribers.insert(email)

    return jsonify({"message": "Subscribed successfully!"}), 201
