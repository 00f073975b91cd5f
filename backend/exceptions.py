from typing import Optional


class BackendError(Exception):
    """Base for all backend collaborator errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(BackendError):
    """Backend unreachable, timed out, or the connection dropped."""


class AuthError(BackendError):
    """Caller is not authenticated or not allowed (401/403)."""


class NotFoundError(BackendError):
    """Entity not found (404)."""


class PayloadError(BackendError):
    """Response body is not JSON or does not have the expected shape."""
