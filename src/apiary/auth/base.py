"""Token providers.

A hub asks its provider for a token before every attempt of every call,
passing the sorted list of scopes the call needs. Providers are expected to
cache and renew tokens themselves; the hub never holds on to one.

To implement a new provider, subclass :class:`GetToken` and implement
:meth:`~GetToken.get_token`.

See Also:
    :class:`~apiary.auth.installed_flow.InstalledFlowAuthenticator` for the
    OAuth2 flow used by the command-line tools.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class GetToken(ABC):
    """Abstract source of bearer tokens."""

    @abstractmethod
    def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        """Return an access token valid for *scopes*.

        Args:
            scopes: The scopes the call needs, sorted.

        Returns:
            The token, or ``None`` to send the request without an
            ``Authorization`` header.

        Raises:
            TokenError: If a token is required but cannot be obtained.
        """
        ...


class NoToken(GetToken):
    """Anonymous access: never supplies a token."""

    def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        return None


class StaticToken(GetToken):
    """Always returns the same token, whatever the scopes.

    Example::

        hub = CloudTasks(httpx.Client(), StaticToken(os.environ["TOKEN"]))
    """

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        return self._token
