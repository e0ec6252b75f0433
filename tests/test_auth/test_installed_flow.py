"""Tests for the installed-application OAuth2 flow."""

from __future__ import annotations

import base64
import hashlib
import io
from datetime import datetime, timedelta, timezone
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

from apiary.auth.installed_flow import InstalledFlowAuthenticator, generate_pkce_pair
from apiary.auth.token_store import TokenStore
from apiary.exceptions import TokenError
from apiary.models import ApplicationSecret, TokenInfo

SCOPE = "https://www.googleapis.com/auth/cloud-platform"
SECRET = ApplicationSecret(client_id="client.apps", client_secret="shh")


@pytest.fixture()
def store(tmp_path: Path) -> TokenStore:
    return TokenStore(tmp_path / "tokens.json")


@pytest.fixture()
def non_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO())


def _expired() -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=5)


def _token_endpoint(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestPkce:
    def test_challenge_is_s256_of_verifier(self) -> None:
        verifier, challenge = generate_pkce_pair()
        assert 43 <= len(verifier) <= 128
        digest = hashlib.sha256(verifier.encode("ascii")).digest()
        assert challenge == base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


class TestGetToken:
    def test_valid_stored_token_is_returned(self, store: TokenStore) -> None:
        store.save([SCOPE], TokenInfo(access_token="stored"))

        def fail(request: httpx.Request) -> httpx.Response:
            raise AssertionError("token endpoint must not be called")

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(fail))
        assert auth.get_token([SCOPE]) == "stored"

    def test_expired_token_is_refreshed_and_persisted(self, store: TokenStore) -> None:
        store.save(
            [SCOPE], TokenInfo(access_token="old", refresh_token="refresh-1", expires_at=_expired())
        )
        seen: list[dict[str, list[str]]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(parse_qs(request.content.decode()))
            return httpx.Response(200, json={"access_token": "new", "expires_in": 3600})

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(handler))
        assert auth.get_token([SCOPE]) == "new"

        assert seen[0]["grant_type"] == ["refresh_token"]
        assert seen[0]["refresh_token"] == ["refresh-1"]
        assert seen[0]["client_id"] == ["client.apps"]

        persisted = store.get([SCOPE])
        assert persisted is not None
        assert persisted.access_token == "new"
        assert persisted.refresh_token == "refresh-1"
        assert not persisted.is_expired(30)

    def test_failed_refresh_without_tty_raises(self, store: TokenStore, non_tty: None) -> None:
        store.save(
            [SCOPE], TokenInfo(access_token="old", refresh_token="revoked", expires_at=_expired())
        )

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "invalid_grant"})

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(handler))
        with pytest.raises(TokenError, match="interactive terminal"):
            auth.get_token([SCOPE])

    def test_no_stored_token_without_tty_raises(self, store: TokenStore, non_tty: None) -> None:
        auth = InstalledFlowAuthenticator(SECRET, store)
        with pytest.raises(TokenError) as exc_info:
            auth.get_token([SCOPE])
        assert exc_info.value.exit_code == 3


class TestRefresh:
    def test_missing_access_token_is_an_error(self, store: TokenStore) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"token_type": "Bearer"})

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(handler))
        with pytest.raises(TokenError, match="access_token"):
            auth.refresh("r")

    def test_invalid_json_is_an_error(self, store: TokenStore) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(handler))
        with pytest.raises(TokenError, match="invalid JSON"):
            auth.refresh("r")

    def test_new_refresh_token_replaces_old(self, store: TokenStore) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"access_token": "a", "refresh_token": "r2"})

        auth = InstalledFlowAuthenticator(SECRET, store, http=_token_endpoint(handler))
        token = auth.refresh("r1")
        assert token.refresh_token == "r2"
        assert token.expires_at is None
