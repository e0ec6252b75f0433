"""Hooks a caller can attach to a call to observe it and steer its retries.

A :class:`Delegate` is consulted at fixed points of
:meth:`~apiary.common.call.CallBuilder.doit`:

1. :meth:`~Delegate.begin` once, before anything else.
2. :meth:`~Delegate.token` when the token provider fails.
3. :meth:`~Delegate.pre_request` before every attempt is sent.
4. :meth:`~Delegate.decide` after a transport error or a non-2xx response.
5. :meth:`~Delegate.response_json_decode_error` when a 2xx body does not
   decode.
6. :meth:`~Delegate.finished` once with the outcome, except after a decode
   failure.

Only :meth:`~Delegate.decide` drives control flow: it returns
:meth:`Retry.after` to sleep and send again, or :meth:`Retry.abort` to give
up with the error at hand.
"""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple, Optional

from apiary.exceptions import ApiError, HttpError

logger = logging.getLogger(__name__)


class MethodInfo(NamedTuple):
    """Identifies the operation a call executes.

    Attributes:
        id: The dotted method id, e.g. ``"cloudtasks.projects.locations.queues.get"``.
        http_method: The HTTP verb.
    """

    id: str
    http_method: str


class Retry:
    """A retry decision: give up, or wait ``delay`` seconds and send again."""

    __slots__ = ("delay",)

    def __init__(self, delay: Optional[float] = None) -> None:
        self.delay = delay

    @classmethod
    def abort(cls) -> Retry:
        return cls(None)

    @classmethod
    def after(cls, seconds: float) -> Retry:
        if seconds < 0:
            raise ValueError("retry delay must not be negative")
        return cls(seconds)

    @property
    def should_retry(self) -> bool:
        return self.delay is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Retry):
            return NotImplemented
        return self.delay == other.delay

    def __repr__(self) -> str:
        return "Retry.abort()" if self.delay is None else f"Retry.after({self.delay})"


class Delegate:
    """Base delegate. Every hook is a no-op, no error is retried."""

    def begin(self, info: MethodInfo) -> None:
        """Called once when the call starts."""

    def pre_request(self) -> None:
        """Called right before each attempt is sent."""

    def token(self, error: Exception) -> Optional[str]:
        """Recover from a token provider failure.

        Args:
            error: The provider's :class:`~apiary.exceptions.TokenError`.

        Returns:
            A token to use for this attempt, or ``None`` to fail the call
            with :class:`~apiary.exceptions.MissingToken`.
        """
        return None

    def decide(self, error: ApiError) -> Retry:
        """Decide whether a failed attempt is retried.

        Args:
            error: :class:`~apiary.exceptions.HttpError` for transport
                failures, :class:`~apiary.exceptions.BadRequest` or
                :class:`~apiary.exceptions.Failure` for non-2xx responses.
        """
        return Retry.abort()

    def response_json_decode_error(self, text: str, error: Exception) -> None:
        """Called when a successful response body fails to decode."""

    def finished(self, is_success: bool) -> None:
        """Called once with the final outcome."""


class DefaultDelegate(Delegate):
    """The delegate used when a call has none."""


class BackoffDelegate(Delegate):
    """Retry transport errors, 429 and 5xx with exponential backoff.

    The delay doubles per retry (``base_delay``, ``2 * base_delay``, ...)
    and is capped at ``max_delay``. Other 4xx responses are never retried.

    The retry count and method are kept per thread and reset by
    :meth:`begin`, so one instance can serve calls running concurrently on
    different threads, each with its own ``max_retries`` budget.

    Args:
        max_retries: Retries after the first attempt; a call makes at most
            ``max_retries + 1`` attempts.
        base_delay: Delay in seconds before the first retry.
        max_delay: Upper bound for any single delay.

    Example::

        hub.projects().locations_queues_get(name).delegate(BackoffDelegate(3)).doit()
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 32.0,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._state = threading.local()

    @property
    def retries(self) -> int:
        """Retries granted so far to the call running on this thread."""
        return getattr(self._state, "retries", 0)

    def begin(self, info: MethodInfo) -> None:
        self._state.method = info
        self._state.retries = 0

    def decide(self, error: ApiError) -> Retry:
        if not _is_transient(error) or self.retries >= self.max_retries:
            return Retry.abort()
        delay = min(self.base_delay * 2 ** self.retries, self.max_delay)
        self._state.retries = self.retries + 1
        method: Optional[MethodInfo] = getattr(self._state, "method", None)
        logger.debug(
            "%s failed (%s), retrying in %ss (retry %d/%d)",
            method.id if method else "call",
            error,
            delay,
            self.retries,
            self.max_retries,
        )
        return Retry.after(delay)


def _is_transient(error: ApiError) -> bool:
    if isinstance(error, HttpError):
        return True
    response = getattr(error, "response", None)
    if response is None:
        return False
    return response.status_code == 429 or response.status_code >= 500
