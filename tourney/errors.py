"""
Error kinds raised by the service core.

The gateway turns every ServiceError into a JSON body of the form
{"message": ...} with the matching status code.
"""


class ServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message}


class InvalidInput(ServiceError):
    """Malformed or missing request fields."""
    status_code = 400
    message = "Invalid input"


class ValidationConflict(ServiceError):
    """A unique key (e.g. email) is already taken."""
    status_code = 400
    message = "Already exists"


class AuthenticationFailure(ServiceError):
    """
    Bad credentials at login, or a missing/invalid bearer token.

    The message never says which part of the credential was wrong.
    """
    status_code = 401
    message = "Invalid credentials"


class NotFound(ServiceError):
    status_code = 404
    message = "Not found"


class StorageFailure(ServiceError):
    """The database is unreachable or rejected a write. Details stay in the server log."""
    status_code = 500
    message = "Internal server error"


def is_encodable(value: str) -> bool:
    """False for strings (e.g. lone surrogates from JSON) that cannot be encoded as UTF-8."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
