"""The hub: one HTTP transport and one token provider shared by all calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Optional

import httpx

from apiary import __version__

if TYPE_CHECKING:
    from apiary.auth.base import GetToken

DEFAULT_USER_AGENT = f"apiary-python-client/{__version__}"


class Hub:
    """Central object of a generated API.

    Holds the :class:`httpx.Client` that sends every request and the token
    provider consulted before every attempt. Generated subclasses set
    ``DEFAULT_BASE_URL`` and ``DEFAULT_ROOT_URL`` and add one factory method
    per resource group.

    Use it as a context manager to close the client when done::

        with CloudTasks(httpx.Client(), StaticToken("ya29...")) as hub:
            hub.projects().locations_list("projects/p").doit()

    Args:
        client: The HTTP transport.
        auth: The token provider.
        base_url: Overrides ``DEFAULT_BASE_URL``.
        root_url: Overrides ``DEFAULT_ROOT_URL``.
        user_agent: Overrides :data:`DEFAULT_USER_AGENT`.
    """

    DEFAULT_BASE_URL: ClassVar[str] = ""
    DEFAULT_ROOT_URL: ClassVar[str] = ""

    def __init__(
        self,
        client: httpx.Client,
        auth: GetToken,
        *,
        base_url: Optional[str] = None,
        root_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.client = client
        self.auth = auth
        self._base_url = base_url or self.DEFAULT_BASE_URL
        self._root_url = root_url or self.DEFAULT_ROOT_URL
        self._user_agent = user_agent or DEFAULT_USER_AGENT

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def root_url(self) -> str:
        return self._root_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def set_user_agent(self, agent_name: str) -> str:
        """Set the user agent sent with every request; returns the previous one."""
        previous, self._user_agent = self._user_agent, agent_name
        return previous

    def set_base_url(self, new_base_url: str) -> str:
        """Set the URL that operation paths are appended to; returns the previous one."""
        previous, self._base_url = self._base_url, new_base_url
        return previous

    def set_root_url(self, new_root_url: str) -> str:
        """Set the service root URL; returns the previous one."""
        previous, self._root_url = self._root_url, new_root_url
        return previous

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Any:
        return self

    def __exit__(self, *args: object) -> None:
        self.client.close()
