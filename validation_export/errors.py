"""
Validation Export Error Classes

This module defines the exception hierarchy for the validation export run.
Every error raised by the package inherits from ValidationExportError, so
the CLI can map each failure to an exit code in one place.

Error Hierarchy:
    ValidationExportError (base)
    ├── ConfigurationError (invalid/missing configuration)
    ├── ValidationFailedError (remote task reported "failed")
    ├── PollTimeoutError (poll bounds exceeded)
    ├── ValidationCancelledError (run cancelled while waiting)
    ├── RemoteClientError (Management API failures)
    │   ├── AuthenticationError (401/403)
    │   └── RemoteTimeoutError (request timed out)
    └── FileWriteError (CSV or JSON write failure)

None of these errors are recovered locally. A run either completes or the
first error propagates to the process exit.
"""

from typing import Optional


class ValidationExportError(Exception):
    """Base exception for all validation export errors."""
    pass


class ConfigurationError(ValidationExportError):
    """Raised when configuration is invalid or missing.

    Common scenarios:
    - Missing environment id or Management API key
    - Non-positive poll interval, attempt count or timeout

    Example:
        >>> raise ConfigurationError(
        >>>     "Management API key not configured. "
        >>>     "Set KONTENT_MANAGEMENT_API_KEY environment variable."
        >>> )
    """
    pass


class ValidationFailedError(ValidationExportError):
    """Raised when the remote validation task reports status "failed".

    Aborts the whole run; no export files are written.

    Attributes:
        task_id: Identifier of the failed validation task
    """

    def __init__(self, task_id: str, message: Optional[str] = None):
        self.task_id = task_id
        super().__init__(message or f"Validation failed (task '{task_id}')")


class PollTimeoutError(ValidationExportError):
    """Raised when a validation task does not finish within the poll bounds.

    Attributes:
        task_id: Identifier of the validation task
        attempts: Number of status checks performed
    """

    def __init__(self, task_id: str, attempts: int, message: str):
        self.task_id = task_id
        self.attempts = attempts
        super().__init__(message)


class ValidationCancelledError(ValidationExportError):
    """Raised when the run is cancelled while waiting for the task."""
    pass


class RemoteClientError(ValidationExportError):
    """Raised when a Management API call fails.

    Covers network failures, non-2xx responses and malformed payloads.
    Not retried.

    Attributes:
        status_code: HTTP status code when a response was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(RemoteClientError):
    """Management API rejected the credentials (401 or 403)."""
    pass


class RemoteTimeoutError(RemoteClientError):
    """Management API request timed out."""
    pass


class FileWriteError(ValidationExportError):
    """Raised when an export file cannot be written.

    A CSV failure prevents the JSON write from being attempted. Partially
    written files are left in place.

    Attributes:
        path: Path of the file that could not be written
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)
