"""
Domain error taxonomy.

Store and provider failures are caught at the wrapper boundary and re-raised
as one of these. The API maps each class to an HTTP status in main.py.
"""


class TalentEvalError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateIdentifierError(TalentEvalError):
    """Raised when a student external identifier is already taken."""

    status_code = 409


class NotFoundError(TalentEvalError):
    """Raised when a record or profile does not exist."""

    status_code = 404


class StorageUnavailableError(TalentEvalError):
    """Raised when the database is unreachable or rejects an operation."""

    status_code = 503


class AuthFailureError(TalentEvalError):
    """Raised when the identity provider rejects a request.

    The provider's own message is passed through unchanged.
    """

    status_code = 401


class ValidationFailureError(TalentEvalError):
    """Raised when input to a write operation is malformed."""

    status_code = 422
