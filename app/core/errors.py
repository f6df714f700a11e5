"""Error taxonomy shared by the identity and scan services.

Each error knows the HTTP status it maps to and whether its message is safe to
show to the caller. Internal errors keep their diagnostic text in ``details``;
the API layer logs it and returns only ``public_message``.
"""
from __future__ import annotations


class AppError(Exception):
    """Base class for every error the services raise on purpose."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    public: bool = False
    public_message: str = "Internal server error."

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def client_message(self) -> str:
        return self.message if self.public else self.public_message


# ---------------------------------------------------------------------------
# Client-facing (4xx)
# ---------------------------------------------------------------------------

class ValidationError(AppError):
    status_code = 400
    error_code = "VALIDATION_FAILED"
    public = True


class MissingInputError(AppError):
    status_code = 400
    error_code = "MISSING_INPUT"
    public = True


class UnsupportedLanguageError(AppError):
    status_code = 400
    error_code = "UNSUPPORTED_LANGUAGE"
    public = True

    def __init__(self, message: str, invalid_codes: list[str], supported_codes: list[str]) -> None:
        super().__init__(message)
        self.invalid_codes = invalid_codes
        self.supported_codes = supported_codes


class AuthenticationFailure(AppError):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"
    public = True

    def __init__(self, details: str | None = None) -> None:
        # The message never varies: callers must not learn why it failed.
        super().__init__("authentication failed", details)


class NotFoundError(AppError):
    status_code = 404
    error_code = "NOT_FOUND"
    public = True


class ConflictError(AppError):
    status_code = 409
    error_code = "CONFLICT"
    public = True


# ---------------------------------------------------------------------------
# Server-side
# ---------------------------------------------------------------------------

class ExtractionError(AppError):
    status_code = 422
    error_code = "OCR_FAILED"
    public_message = "Failed to process image for OCR."


class HashingFailure(AppError):
    error_code = "HASHING_FAILED"


class SigningFailure(AppError):
    error_code = "SIGNING_FAILED"


class PersistenceError(AppError):
    error_code = "PERSISTENCE_FAILED"
