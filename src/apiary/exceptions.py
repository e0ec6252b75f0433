"""Exception hierarchy for apiary.

All exceptions inherit from :class:`ApiaryError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apiary.exit_codes`.
The CLI entry point in :func:`apiary.cli.app.run` catches ``ApiaryError``
and exits with the appropriate code.

Errors raised by :meth:`~apiary.common.call.CallBuilder.doit` all derive
from :class:`ApiError`; every call either returns a decoded value or raises
exactly one of them.

Subclass hierarchy::

    ApiaryError (exit 1)
    +-- ConfigError             (exit 1)
    +-- TokenError              (exit 3)
    +-- InvalidOptionsError     (exit 2, or 3/4 for config problems)
    +-- CallConsumedError       (exit 1)
    +-- ApiError                (exit 1)
        +-- HttpError               (exit 6)
        +-- BadRequest              (exit 5)
        +-- Failure                 (exit 5)
        +-- JsonDecodeError         (exit 1)
        +-- MissingToken            (exit 3)
        +-- FieldClash              (exit 2)
        +-- Cancelled               (exit 130)
        +-- OutputError             (exit 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from apiary.exit_codes import (
    EXIT_API_ERROR,
    EXIT_AUTH_FAILURE,
    EXIT_CANCELLED,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)

if TYPE_CHECKING:
    import httpx

    from apiary.common.schema import ErrorResponse


class ApiaryError(Exception):
    """Base exception for all apiary errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`apiary.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(ApiaryError):
    """Raised for configuration problems (config directory, application secret)."""

    exit_code = EXIT_GENERIC_FAILURE


class TokenError(ApiaryError):
    """Raised by a token provider that cannot produce a token for the requested scopes."""

    exit_code = EXIT_AUTH_FAILURE


class CallConsumedError(ApiaryError):
    """Raised when :meth:`~apiary.common.call.CallBuilder.doit` runs twice on one builder."""


class InvalidOptionsError(ApiaryError):
    """A batch of command-line issues collected during the validation pass.

    Issues are gathered rather than raised one at a time, so a user sees
    every problem with an invocation at once.

    Args:
        issues: The collected :class:`~apiary.cli.issues.CLIError` items.
        exit_code: Process exit code; defaults to :data:`EXIT_INVALID_USAGE`.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, issues: list[Any], exit_code: int | None = None):
        self.issues = list(issues)
        super().__init__("\n".join(str(issue) for issue in self.issues), exit_code)

    @classmethod
    def single(cls, issue: Any, exit_code: int) -> InvalidOptionsError:
        return cls([issue], exit_code)


# ---------------------------------------------------------------------------
# Call errors
# ---------------------------------------------------------------------------


class ApiError(ApiaryError):
    """Base class for every terminal outcome of a failed call."""


class HttpError(ApiError):
    """The transport failed before a response was received."""

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"HTTP transport error: {cause}")


class BadRequest(ApiError):
    """A non-2xx response whose body parsed as a structured error payload.

    Attributes:
        error: The parsed :class:`~apiary.common.schema.ErrorResponse`.
        response: The raw :class:`httpx.Response`.
    """

    exit_code = EXIT_API_ERROR

    def __init__(self, error: ErrorResponse, response: Optional[httpx.Response] = None):
        self.error = error
        self.response = response
        details = error.error
        if details is not None and details.message:
            message = f"Bad Request ({details.code}): {details.message}"
        else:
            message = f"Bad Request: {error.to_json()}"
        super().__init__(message)


class Failure(ApiError):
    """A non-2xx response without a structured error payload."""

    exit_code = EXIT_API_ERROR

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(
            f"Http status indicates failure: {response.status_code} "
            f"{response.reason_phrase or ''}".rstrip()
        )


class JsonDecodeError(ApiError):
    """A JSON payload could not be decoded into the expected schema type.

    Attributes:
        text: The raw text that failed to decode.
        cause: The underlying parse or validation error.
    """

    def __init__(self, text: str, cause: Exception):
        self.text = text
        self.cause = cause
        super().__init__(f"JSON decoding error '{_shorten(text)}': {cause}")


class MissingToken(ApiError):
    """No token could be obtained and the delegate declined to supply one."""

    exit_code = EXIT_AUTH_FAILURE

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Token retrieval failed: {cause}")


class FieldClash(ApiError):
    """An additional parameter collides with a typed parameter of the call."""

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"The custom parameter '{field}' is already provided natively by the CallBuilder."
        )


class Cancelled(ApiError):
    """The user interrupted the operation (Ctrl-C)."""

    exit_code = EXIT_CANCELLED

    def __init__(self) -> None:
        super().__init__("Operation cancelled")


class OutputError(ApiError):
    """The CLI could not open or write its output file."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to open output file '{path}': {cause}")


def _shorten(text: str, width: int = 120) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."
