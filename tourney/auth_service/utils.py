"""
Bearer token helpers.
Provides token issuing/verification and the request-level auth gate.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt
from flask import Response, current_app, jsonify, request

from tourney.database.models import CallerIdentity
from tourney.errors import AuthenticationFailure

ALGORITHM = "HS256"


class TokenService:
    """
    Issues and verifies HS256-signed JWTs carrying {sub, email}.

    The secret is handed in once at startup and never read from the
    environment afterwards.

    Args:
        secret (str): Signing key. Must be non-empty.
        expiration_minutes (int): Token lifetime. 0 issues tokens without an
            "exp" claim.
    """

    def __init__(self, secret: str, expiration_minutes: int = 1440):
        if not secret:
            raise RuntimeError("JWT_SECRET is missing. Set it in .env")
        self._secret = secret
        self.expiration_minutes = expiration_minutes

    def __repr__(self) -> str:
        return f"TokenService(expiration_minutes={self.expiration_minutes})"

    def issue(self, subject_id: int, email: str) -> str:
        """
        Generate a signed token for a user.

        Args:
            subject_id (int): The user's id.
            email (str): The user's email.

        Returns:
            str: Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(subject_id),
            "email": email,
            "iat": now,
        }
        if self.expiration_minutes > 0:
            payload["exp"] = now + timedelta(minutes=self.expiration_minutes)

        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[CallerIdentity]:
        """
        Validate the signature (and expiry, if present) and decode the claims.

        Returns:
            CallerIdentity if valid, None otherwise. Never raises.
        """
        if not isinstance(token, str) or not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "iat"]},
            )
            subject_id = int(payload["sub"])
        except (jwt.InvalidTokenError, ValueError, TypeError):
            return None

        email = payload.get("email")
        if not isinstance(email, str):
            return None
        return CallerIdentity(subject_id=subject_id, email=email)


# --- AUTH GATE ---
def verify_token_from_request() -> Tuple[Optional[CallerIdentity], Optional[Response], Optional[int]]:
    """
    Verify the bearer token in the Authorization header.

    Returns:
        tuple: (identity, error_response, status_code)
               If successful, error_response and status_code are None.
               If failed, identity is None.
    """
    auth = request.headers.get("Authorization", "")

    if not auth.startswith("Bearer "):
        return None, *_reject(AuthenticationFailure("Missing token"))

    token = auth.split(" ", 1)[1].strip()
    identity = current_app.tokens.verify(token)
    if identity is None:
        logging.info(f"[Auth] Rejected token on {request.method} {request.path}")
        return None, *_reject(AuthenticationFailure("Invalid token"))

    return identity, None, None


def _reject(err: AuthenticationFailure) -> Tuple[Response, int]:
    return jsonify(err.to_dict()), err.status_code
