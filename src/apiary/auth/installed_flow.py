"""OAuth2 installed-application flow with PKCE and a persistent token store.

This module provides :class:`InstalledFlowAuthenticator`, the token provider
behind every generated command-line tool. For a requested scope set it:

1. Returns the stored token when it is valid for at least 30 more seconds.
2. Otherwise renews it with the stored refresh token.
3. Otherwise runs the interactive Authorization Code grant with PKCE
   (:rfc:`7636`): opens the consent page in the user's browser, listens on a
   loopback HTTP server for the redirect, and exchanges the code.

Every token obtained in step 2 or 3 is written to the
:class:`~apiary.auth.token_store.TokenStore` before it is returned.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import secrets
import socket
import sys
import threading
import webbrowser
from datetime import datetime, timedelta, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Optional, Sequence
from urllib.parse import parse_qs, urlencode, urlparse

import httpx

from apiary.auth.base import GetToken
from apiary.auth.token_store import TokenStore
from apiary.exceptions import TokenError
from apiary.models import ApplicationSecret, TokenInfo

logger = logging.getLogger(__name__)

EXPIRY_MARGIN = 30.0
CALLBACK_TIMEOUT = 120


def generate_pkce_pair() -> tuple[str, str]:
    """Generate a PKCE code_verifier and code_challenge (S256).

    Returns:
        A tuple of ``(code_verifier, code_challenge)``.
    """
    # RFC 7636: 43-128 characters from the unreserved set
    code_verifier = secrets.token_urlsafe(64)[:128]
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    code_challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return code_verifier, code_challenge


def _find_free_port() -> int:
    """Find a free TCP port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class InstalledFlowAuthenticator(GetToken):
    """Obtain tokens for an installed application, persisting them in *store*.

    Args:
        secret: The OAuth client registration.
        store: Where tokens are kept between runs.
        http: Client used for the token endpoint. When ``None`` a
            short-lived request is made with :func:`httpx.post`.

    Example::

        auth = InstalledFlowAuthenticator(secret, TokenStore.for_api(config_dir, "cloudtasks2-beta3"))
        token = auth.get_token(["https://www.googleapis.com/auth/cloud-platform"])
    """

    def __init__(
        self,
        secret: ApplicationSecret,
        store: TokenStore,
        http: Optional[httpx.Client] = None,
    ) -> None:
        self._secret = secret
        self._store = store
        self._http = http

    def get_token(self, scopes: Sequence[str]) -> Optional[str]:
        """Return a valid access token for *scopes*.

        Raises:
            TokenError: If no token can be obtained or persisted.
        """
        key = sorted(scopes)
        stored = self._store.get(key)
        if stored is not None and not stored.is_expired(EXPIRY_MARGIN):
            return stored.access_token

        token: Optional[TokenInfo] = None
        if stored is not None and stored.refresh_token:
            try:
                token = self.refresh(stored.refresh_token)
            except TokenError as exc:
                logger.info("Token refresh failed, starting interactive login: %s", exc)

        if token is None:
            token = self.login_interactive(key)

        try:
            self._store.save(key, token)
        except OSError as exc:
            raise TokenError(f"Failed to persist token to {self._store.path}: {exc}") from exc
        return token.access_token

    def refresh(self, refresh_token: str) -> TokenInfo:
        """Exchange *refresh_token* for a new access token.

        The refresh token is carried over when the response omits it.
        """
        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self._secret.client_id,
            "client_secret": self._secret.client_secret,
        }
        token_data = self._post_token_request(data, "Token refresh")
        return _token_from_response(token_data, refresh_token)

    def login_interactive(self, scopes: Sequence[str]) -> TokenInfo:
        """Run the full interactive authorization code flow.

        Requires a TTY (browser access). Raises ``TokenError`` if stdin is
        not a TTY or the application secret has no client id.
        """
        if not sys.stdin.isatty():
            raise TokenError(
                "OAuth2 authorization requires an interactive terminal "
                "(stdin must be a TTY); set APIARY_ACCESS_TOKEN for non-interactive use"
            )
        if not self._secret.client_id:
            raise TokenError(
                "The application secret has no client_id; edit the secret file "
                "in the configuration directory"
            )

        code_verifier, code_challenge = generate_pkce_pair()
        port = _find_free_port()
        redirect_uri = f"http://127.0.0.1:{port}/"

        params = {
            "response_type": "code",
            "client_id": self._secret.client_id,
            "redirect_uri": redirect_uri,
            "scope": " ".join(scopes),
            "access_type": "offline",
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
        }
        auth_url = f"{self._secret.auth_uri}?{urlencode(params)}"

        code = self._wait_for_callback(port, auth_url)
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier,
            "client_id": self._secret.client_id,
            "client_secret": self._secret.client_secret,
        }
        token_data = self._post_token_request(data, "Token exchange")
        return _token_from_response(token_data, None)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _post_token_request(self, data: dict[str, str], what: str) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        try:
            if self._http is not None:
                response = self._http.post(self._secret.token_uri, data=data, headers=headers)
            else:
                response = httpx.post(
                    self._secret.token_uri, data=data, headers=headers, timeout=30.0
                )
            response.raise_for_status()
            token_data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as exc:
            raise TokenError(
                f"{what} failed with status {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TokenError(f"{what} failed: {exc}") from exc
        except ValueError as exc:
            raise TokenError(f"{what} returned invalid JSON: {exc}") from exc

        if "access_token" not in token_data:
            raise TokenError(f"{what} response missing 'access_token' field")
        return token_data

    def _wait_for_callback(self, port: int, auth_url: str) -> str:
        """Serve one request on the loopback port and return the authorization code.

        Raises:
            TokenError: If the provider returns an error or no code arrives
                within :data:`CALLBACK_TIMEOUT` seconds.
        """
        result: dict[str, Optional[str]] = {"code": None, "error": None}

        class CallbackHandler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                params = parse_qs(urlparse(self.path).query)

                if "error" in params:
                    result["error"] = params["error"][0]
                    body = f"Authorization failed: {result['error']}"
                elif "code" in params:
                    result["code"] = params["code"][0]
                    body = (
                        "Authorization successful! You can close this window "
                        "and return to the terminal."
                    )
                else:
                    result["error"] = "no_code"
                    body = "No authorization code received."

                self.send_response(200)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.end_headers()
                self.wfile.write(f"<html><body><h2>{body}</h2></body></html>".encode("utf-8"))

            def log_message(self, format: str, *args: Any) -> None:
                logger.debug("callback server: " + format, *args)

        server = HTTPServer(("127.0.0.1", port), CallbackHandler)
        server.timeout = CALLBACK_TIMEOUT

        sys.stderr.write(
            "Please direct your browser to the following URL and follow the "
            f"instructions:\n\n{auth_url}\n\n"
        )
        threading.Thread(target=webbrowser.open, args=(auth_url,), daemon=True).start()

        server.handle_request()
        server.server_close()

        if result["error"]:
            raise TokenError(f"OAuth2 authorization failed: {result['error']}")
        if not result["code"]:
            raise TokenError("No authorization code received from callback")
        return result["code"]


def _token_from_response(data: dict[str, Any], previous_refresh: Optional[str]) -> TokenInfo:
    expires_at = None
    expires_in = data.get("expires_in")
    if expires_in is not None:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=float(expires_in))
    return TokenInfo(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token") or previous_refresh,
        expires_at=expires_at,
        token_type=data.get("token_type", "Bearer"),
    )
