"""
Custom exceptions for the application.

Services and repositories raise these; the Flask error handlers registered
in ``hms.core.api_utils`` turn them into the standard JSON envelope using
``status_code``.
"""


class HMSError(Exception):
    """Base class for domain errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""


class NotFoundError(HMSError):
    """Referenced entity does not exist."""

    status_code = 404


class ConflictError(HMSError):
    """Operation conflicts with the current state (e.g. room already occupied)."""

    status_code = 409


class ValidationError(HMSError):
    """Request data is missing or malformed."""

    status_code = 400


class AuthenticationError(HMSError):
    """Missing, invalid or expired bearer token."""

    status_code = 401


class PermissionDeniedError(HMSError):
    """Authenticated user lacks the permission for this route."""

    status_code = 403
