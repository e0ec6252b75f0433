"""Shared test fixtures for apiary.

Provides a recording mock transport, hubs wired to it, isolated
configuration directories, and output state management. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import httpx
import pytest

from apiary.auth.base import GetToken
from apiary.exceptions import TokenError
from apiary.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    NO_COLOR keeps Rich from wrapping or styling what tests assert on.
    """
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("APIARY_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("APIARY_CONFIG_DIR", raising=False)
    yield
    reset_output()


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


class Recorder:
    """Mock transport handler that records requests and replays responses.

    Responses are consumed in order; the last one repeats once the queue is
    exhausted. A response may also be an exception instance, which is
    raised instead.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Any] = [httpx.Response(200, json={})]

    def reply(self, *responses: Any) -> Recorder:
        self._responses = list(responses)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


class CountingToken(GetToken):
    """Token provider that hands out a fresh token per call and records scopes."""

    def __init__(self, fail: Optional[Exception] = None) -> None:
        self.calls: list[list[str]] = []
        self._fail = fail

    def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        self.calls.append(list(scopes))
        if self._fail is not None:
            raise self._fail
        return f"token-{len(self.calls)}"


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def token() -> CountingToken:
    return CountingToken()


@pytest.fixture
def failing_token() -> CountingToken:
    """A provider whose every call raises TokenError."""
    return CountingToken(fail=TokenError("no grant"))


@pytest.fixture
def make_hub(recorder: Recorder, token: CountingToken) -> Callable[[type], Any]:
    """Build a hub of the given class on the recording transport."""

    def _make(hub_cls: type) -> Any:
        return hub_cls(recorder.client(), token)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """An empty per-test configuration directory."""
    path = tmp_path / "config"
    path.mkdir()
    return path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
