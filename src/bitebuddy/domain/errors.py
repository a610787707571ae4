"""Application error taxonomy."""


class AppError(Exception):
    """Base application error carrying an HTTP status code."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Raised when request input is missing or malformed."""

    status_code = 400


class AuthenticationError(AppError):
    """Raised when the bearer credential is missing or rejected."""

    status_code = 401


class AuthorizationError(AppError):
    """Raised when an authenticated user may not perform an action."""

    status_code = 403


class NotFoundError(AppError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(AppError):
    """Raised when a request collides with an existing record."""

    status_code = 409


class UpstreamError(AppError):
    """Raised when the places search collaborator fails."""

    status_code = 502


class StateError(AppError):
    """Raised when an operation is invalid for the session lifecycle state."""

    status_code = 400
