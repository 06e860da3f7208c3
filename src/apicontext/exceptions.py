"""Exception hierarchy for apicontext.

All exceptions inherit from :class:`ApiContextError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apicontext.exit_codes`.
The command entry point in :func:`apicontext.app.main` catches
``ApiContextError`` and exits with the appropriate code.

Validation problems in an otherwise usable document are *not* exceptions:
:func:`~apicontext.generator.context_builder.transform` records them in the
context's ``messages`` collection instead.

Subclass hierarchy::

    ApiContextError           (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- DocumentError         (exit 7)
    +-- ValidationFailedError (exit 8)
    +-- ConfigError           (exit 1)
"""

from apicontext.exit_codes import (
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_VALIDATION_FAILED,
)


class ApiContextError(Exception):
    """Base exception for all apicontext errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiContextError):
    """Raised for invalid command-line arguments (e.g. a malformed ``--set``)."""

    exit_code = EXIT_INVALID_USAGE


class DocumentError(ApiContextError):
    """Raised when the API document cannot be loaded or lacks required structure."""

    exit_code = EXIT_DOCUMENT_ERROR


class ValidationFailedError(ApiContextError):
    """Raised by the command in ``--strict`` mode when validation reported an error."""

    exit_code = EXIT_VALIDATION_FAILED


class ConfigError(ApiContextError):
    """Raised when transform options carry values of the wrong type."""

    exit_code = EXIT_GENERIC_FAILURE
