"""Domain errors raised by the service layer.

Every error carries the HTTP status code and message the API layer answers
with, so routes can let them propagate to the handler registered in
``app.main``.
"""

from fastapi import status

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class ServiceError(Exception):
    """Base class for locally recoverable service failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request failed"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"
    headers = _BEARER_CHALLENGE


class PendingApprovalError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Account pending approval"


class InvalidTokenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Invalid token"


class ExpiredTokenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Token expired"


class UnauthorizedError(ServiceError):
    """No identity could be established for the caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authorization header missing"
    headers = _BEARER_CHALLENGE


class ForbiddenError(ServiceError):
    """Identity present but its role is not allowed to do this."""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "Insufficient permissions"


# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------


class MissingFieldsError(ServiceError):
    detail = "All fields are required"


class DuplicateUsernameError(ServiceError):
    detail = "Username already exists"


class DuplicateEmailError(ServiceError):
    detail = "Email already exists"


class PasswordTooLongError(ServiceError):
    detail = "Password must be at most 72 bytes"


class UserNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


# ---------------------------------------------------------------------------
# Evidence
# ---------------------------------------------------------------------------


class EvidenceNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Evidence not found"


class ContentNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Evidence content not found"


class InvalidStatusError(ServiceError):
    detail = "Invalid status value"


class PayloadTooLargeError(ServiceError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    detail = "File exceeds the upload size limit"
