"""
CLI Error Handling

Maps validation export errors to user-facing messages and exit codes.
"""

import logging
import sys
from contextlib import contextmanager

import click

from cli.help_texts import ExitCodes
from validation_export.errors import (
    AuthenticationError,
    ConfigurationError,
    FileWriteError,
    PollTimeoutError,
    RemoteClientError,
    ValidationCancelledError,
    ValidationExportError,
    ValidationFailedError,
)


logger = logging.getLogger(__name__)

# Most specific first
ERROR_EXIT_CODES = (
    (ConfigurationError, ExitCodes.INVALID_CONFIGURATION),
    (ValidationFailedError, ExitCodes.VALIDATION_FAILED),
    (PollTimeoutError, ExitCodes.POLL_TIMEOUT),
    (ValidationCancelledError, ExitCodes.CANCELLED),
    (AuthenticationError, ExitCodes.AUTHENTICATION_ERROR),
    (RemoteClientError, ExitCodes.NETWORK_ERROR),
    (FileWriteError, ExitCodes.PERMISSION_ERROR),
)


def exit_code_for(error: BaseException) -> int:
    """Exit code for an error raised during a run."""
    for error_type, code in ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCodes.GENERAL_ERROR


@contextmanager
def exit_on_error():
    """Report run errors on stderr and exit with the matching code."""
    try:
        yield
    except ValidationExportError as e:
        logger.debug("Run aborted", exc_info=True)
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(exit_code_for(e))
    except KeyboardInterrupt:
        click.echo(click.style("Cancelled", fg="red"), err=True)
        sys.exit(ExitCodes.CANCELLED)
