"""
Reporting Errors

Exception types raised by the services layer. `main.py` maps each one to an
HTTP status and a JSON ``{"error": message}`` body:

- NotFoundError            -> 404
- ValidationFailure        -> 400
- ConflictError            -> 409
- StorageError             -> 500
- SummaryUnavailableError  -> 503 (or 429 when rate limited)
"""


class ReportingError(Exception):
    """Base class for all service-level errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ReportingError):
    """Requested report, director, region or master record does not exist."""

    status_code = 404


class ValidationFailure(ReportingError, ValueError):
    """Input rejected before any write happened."""

    status_code = 400


class ConflictError(ReportingError):
    """Delete blocked by dependents, or a unique value is already taken."""

    status_code = 409


class StorageError(ReportingError):
    """The database call failed; the write was rolled back."""

    status_code = 500


class SummaryUnavailableError(ReportingError):
    """The LLM provider is not configured or refused the request."""

    status_code = 503

    def __init__(self, message: str, status_code: int = 503):
        super().__init__(message)
        self.status_code = status_code
