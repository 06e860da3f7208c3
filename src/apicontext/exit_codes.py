"""Numeric process exit codes used by the ``apicontext`` command.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apicontext.exceptions.ApiContextError` subclass.
Build scripts wrapping the command can inspect the exit code to tell a
broken document apart from a document that merely failed validation.

Example::

    $ apicontext petstore.yaml --strict > context.json
    $ echo $?
    8   # EXIT_VALIDATION_FAILED -- the context was built, but flagged invalid
"""

EXIT_SUCCESS = 0
"""The context was built successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_DOCUMENT_ERROR = 7
"""The API document could not be loaded or is structurally unusable."""

EXIT_VALIDATION_FAILED = 8
"""The document failed validation and ``--strict`` was requested."""
