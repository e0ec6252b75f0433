"""Call builders and the routine that executes every REST operation.

A call builder collects the arguments of one operation and sends it with
:meth:`CallBuilder.doit`. Generated subclasses only declare metadata (method
id, HTTP verb, path template, parameter names, response type, default scope)
and one typed setter per parameter; the request itself is always built and
sent by the code in this module:

1. Reject additional parameters that collide with typed ones.
2. Assemble the URL: typed parameters, additional parameters, ``alt=json``,
   then path placeholders substituted and removed from the query.
3. Loop: fetch a token, send, and either return the decoded response, raise
   the error, or sleep and send again when the delegate says so.

Builders are immutable. Every setter returns a new builder and leaves the
receiver untouched, so a partially configured builder can be shared and
specialised. A builder can be executed once.
"""

from __future__ import annotations

import copy
import json
import logging
import time
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Optional, TypeVar

import httpx

from apiary.common.delegate import DefaultDelegate, Delegate, MethodInfo, Retry
from apiary.common.schema import ErrorResponse, Schema, remove_json_null_values
from apiary.common.url import Params
from apiary.exceptions import (
    ApiError,
    BadRequest,
    CallConsumedError,
    Failure,
    FieldClash,
    HttpError,
    JsonDecodeError,
    MissingToken,
    TokenError,
)

if TYPE_CHECKING:
    from apiary.common.hub import Hub

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="CallBuilder")


class CallBuilder:
    """Base class of every generated call builder.

    Class attributes set by subclasses:

    * ``METHOD_ID`` -- dotted method id reported to the delegate.
    * ``HTTP_METHOD`` -- the HTTP verb.
    * ``PATH`` -- URI template relative to the hub's base URL.
    * ``PATH_PARAMS`` -- ``(placeholder, wire name)`` pairs, e.g.
      ``("{+name}", "name")``.
    * ``PARAMS`` -- wire names of all typed parameters, in the order they are
      added to the query. These names, and ``alt``, cannot be set through
      :meth:`param`.
    * ``RESPONSE`` -- the schema type the response body decodes into.
    * ``DEFAULT_SCOPE`` -- scope requested when none was added.

    Args:
        hub: The hub providing transport and tokens.
        request: The request body, for operations that take one.
        **params: Initial typed parameter values keyed by wire name.
    """

    METHOD_ID: ClassVar[str] = ""
    HTTP_METHOD: ClassVar[str] = "GET"
    PATH: ClassVar[str] = ""
    PATH_PARAMS: ClassVar[tuple[tuple[str, str], ...]] = ()
    PARAMS: ClassVar[tuple[str, ...]] = ()
    RESPONSE: ClassVar[type[Schema]] = Schema
    DEFAULT_SCOPE: ClassVar[Optional[str]] = None

    def __init__(self, hub: Hub, request: Optional[Schema] = None, **params: Any) -> None:
        self._hub = hub
        self._request = request
        self._params: dict[str, Any] = dict(params)
        self._additional_params: dict[str, str] = {}
        self._scopes: frozenset[str] = frozenset()
        self._delegate: Optional[Delegate] = None
        self._consumed = False

    # ------------------------------------------------------------------ #
    # Copy-on-write setters
    # ------------------------------------------------------------------ #

    def _replace(self: C, **changes: Any) -> C:
        clone = copy.copy(self)
        for attr, value in changes.items():
            setattr(clone, attr, value)
        return clone

    def _set(self: C, name: str, value: Any) -> C:
        return self._replace(_params={**self._params, name: value})

    def _append(self: C, name: str, value: Any) -> C:
        current = list(self._params.get(name) or ())
        current.append(value)
        return self._replace(_params={**self._params, name: current})

    def request(self: C, new_value: Schema) -> C:
        """Set the request body."""
        return self._replace(_request=new_value)

    def param(self: C, name: str, value: str) -> C:
        """Set an additional query parameter not covered by a typed setter.

        Typical uses are the standard parameters every Google API accepts,
        such as ``fields`` or ``quotaUser``. Names already provided by a
        typed setter make :meth:`doit` fail with
        :class:`~apiary.exceptions.FieldClash`.
        """
        return self._replace(_additional_params={**self._additional_params, name: value})

    def add_scope(self: C, scope: str) -> C:
        """Request *scope* instead of the default one. Can be called repeatedly."""
        return self._replace(_scopes=self._scopes | {scope})

    def add_scopes(self: C, scopes: Iterable[str]) -> C:
        return self._replace(_scopes=self._scopes | frozenset(scopes))

    def clear_scopes(self: C) -> C:
        """Drop all added scopes so the default scope is requested again."""
        return self._replace(_scopes=frozenset())

    def delegate(self: C, new_value: Delegate) -> C:
        """Attach a delegate observing this call and deciding on retries."""
        return self._replace(_delegate=new_value)

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def doit(self) -> tuple[httpx.Response, Any]:
        """Execute the operation.

        Returns:
            The raw :class:`httpx.Response` and the decoded ``RESPONSE`` value.

        Raises:
            CallConsumedError: If this builder was already executed.
            FieldClash: If an additional parameter shadows a typed one.
            MissingToken: If no token could be obtained.
            HttpError: On transport failure.
            BadRequest: On a non-2xx response with a structured error body.
            Failure: On any other non-2xx response.
            JsonDecodeError: If a 2xx body does not decode into ``RESPONSE``.
        """
        if self._consumed:
            raise CallConsumedError(f"{self.METHOD_ID}: doit() was already called on this builder")
        self._consumed = True

        dlg = self._delegate or DefaultDelegate()
        dlg.begin(MethodInfo(self.METHOD_ID, self.HTTP_METHOD))

        for field in ("alt", *self.PARAMS):
            if field in self._additional_params:
                dlg.finished(False)
                raise FieldClash(field)

        url, query = self._build_url()
        scopes = sorted(self._scopes or ([self.DEFAULT_SCOPE] if self.DEFAULT_SCOPE else []))
        body = self._encode_body()
        return self._execute(dlg, url, query, scopes, body)

    def _build_url(self) -> tuple[str, list[tuple[str, str]]]:
        """Return the expanded URL and the ordered query parameters."""
        params = Params()
        for name in self.PARAMS:
            value = self._params.get(name)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                for item in value:
                    params.push(name, item)
            else:
                params.push(name, value)
        params.extend(self._additional_params.items())
        params.push("alt", "json")

        url = self._hub.base_url + self.PATH
        for find_this, param_name in self.PATH_PARAMS:
            url = params.uri_replacement(url, param_name, find_this, find_this.startswith("{+"))
        params.remove(param_name for _, param_name in self.PATH_PARAMS)
        return url, list(params)

    def _encode_body(self) -> Optional[bytes]:
        if self._request is None:
            return None
        value = remove_json_null_values(self._request.to_json_value())
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def _execute(
        self,
        dlg: Delegate,
        url: str,
        query: list[tuple[str, str]],
        scopes: list[str],
        body: Optional[bytes],
    ) -> tuple[httpx.Response, Any]:
        hub = self._hub
        attempt = 0
        while True:
            attempt += 1
            try:
                token = hub.auth.get_token(scopes)
            except TokenError as exc:
                token = dlg.token(exc)
                if token is None:
                    dlg.finished(False)
                    raise MissingToken(exc) from exc

            headers = {"User-Agent": hub.user_agent}
            if token:
                headers["Authorization"] = f"Bearer {token}"
            if body is not None:
                headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(body) if body is not None else 0)

            dlg.pre_request()
            logger.debug("%s %s (attempt %d)", self.HTTP_METHOD, url, attempt)
            try:
                response = hub.client.request(
                    self.HTTP_METHOD, url, params=query, headers=headers, content=body
                )
            except httpx.RequestError as exc:
                error: ApiError = HttpError(exc)
                if self._should_retry(dlg, error):
                    continue
                dlg.finished(False)
                raise error from exc

            if not response.is_success:
                error = _error_from_response(response)
                if self._should_retry(dlg, error):
                    continue
                dlg.finished(False)
                raise error

            text = response.text
            try:
                value = self.RESPONSE.from_json(text)
            except JsonDecodeError as exc:
                dlg.response_json_decode_error(text, exc.cause)
                raise
            dlg.finished(True)
            return response, value

    @staticmethod
    def _should_retry(dlg: Delegate, error: ApiError) -> bool:
        retry: Retry = dlg.decide(error)
        if retry.delay is None:
            return False
        logger.debug("retrying after %ss: %s", retry.delay, error)
        time.sleep(retry.delay)
        return True


def _error_from_response(response: httpx.Response) -> ApiError:
    payload = ErrorResponse.parse(response.text)
    if payload is not None:
        return BadRequest(payload, response)
    return Failure(response)
