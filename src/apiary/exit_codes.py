"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apiary.exceptions.ApiaryError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ cloudtasks2-beta3 projects locations-queues-get projects/p/locations/l/queues/q
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- no token could be obtained
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or parameters."""

EXIT_AUTH_FAILURE = 3
"""No access token could be obtained."""

EXIT_CONFIG_DIR = 3
"""The configuration directory could not be created or accessed."""

EXIT_CONFIG_SECRET = 4
"""The application secret file could not be read or parsed."""

EXIT_API_ERROR = 5
"""The remote API answered with a non-2xx status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CANCELLED = 130
"""The operation was cancelled (Ctrl-C)."""
