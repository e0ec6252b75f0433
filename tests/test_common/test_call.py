"""Tests for apiary.common.call: the generic operation executor."""

from __future__ import annotations

from typing import Optional
from unittest.mock import patch

import httpx
import pytest

from apiary.apis.cloudtasks2_beta3.api import CloudTasks, PauseQueueRequest, Queue, Scope
from apiary.common.delegate import BackoffDelegate, Delegate, MethodInfo, Retry
from apiary.common.field_mask import FieldMask
from apiary.exceptions import (
    BadRequest,
    CallConsumedError,
    Failure,
    FieldClash,
    HttpError,
    JsonDecodeError,
    MissingToken,
)

BASE = "https://cloudtasks.googleapis.com/v2beta3/"
PARENT = "projects/p/locations/l"
QUEUE = f"{PARENT}/queues/q"


def _query(request: httpx.Request) -> list[tuple[str, str]]:
    return list(request.url.params.multi_items())


class RecordingDelegate(Delegate):
    """Delegate that records every hook invocation."""

    def __init__(self, decisions: Optional[list[Retry]] = None, token: Optional[str] = None) -> None:
        self.events: list[tuple] = []
        self._decisions = list(decisions or [])
        self._token = token

    def begin(self, info: MethodInfo) -> None:
        self.events.append(("begin", info))

    def pre_request(self) -> None:
        self.events.append(("pre_request",))

    def token(self, error: Exception) -> Optional[str]:
        self.events.append(("token", type(error).__name__))
        return self._token

    def decide(self, error) -> Retry:
        self.events.append(("decide", type(error).__name__))
        return self._decisions.pop(0) if self._decisions else Retry.abort()

    def response_json_decode_error(self, text: str, error: Exception) -> None:
        self.events.append(("decode_error", text))

    def finished(self, is_success: bool) -> None:
        self.events.append(("finished", is_success))


@pytest.fixture
def hub(make_hub) -> CloudTasks:
    return make_hub(CloudTasks)


# ---------------------------------------------------------------------------
# Request assembly
# ---------------------------------------------------------------------------


class TestRequestAssembly:
    def test_create_queue(self, hub: CloudTasks, recorder, token) -> None:
        recorder.reply(httpx.Response(200, json={"name": QUEUE, "state": "RUNNING"}))

        response, queue = hub.projects().locations_queues_create(Queue(), PARENT).doit()

        request = recorder.last
        assert request.method == "POST"
        assert str(request.url) == f"{BASE}{PARENT}/queues?alt=json"
        assert request.content == b"{}"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Content-Length"] == "2"
        assert request.headers["Authorization"] == "Bearer token-1"
        assert request.headers["User-Agent"].startswith("apiary-python-client/")
        assert token.calls == [[Scope.CLOUD_PLATFORM.value]]
        assert response.status_code == 200
        assert queue == Queue(name=QUEUE, state="RUNNING")

    def test_body_nulls_stripped(self, hub: CloudTasks, recorder) -> None:
        hub.projects().locations_queues_create(Queue(name="q", state=None), PARENT).doit()
        assert recorder.body() == {"name": "q"}

    def test_empty_field_mask_sent_once(self, hub: CloudTasks, recorder) -> None:
        hub.projects().locations_queues_get(QUEUE).read_mask(FieldMask()).doit()

        request = recorder.last
        assert request.method == "GET"
        assert request.url.path == f"/v2beta3/{QUEUE}"
        assert _query(request) == [("readMask", ""), ("alt", "json")]

    def test_get_without_body(self, hub: CloudTasks, recorder) -> None:
        hub.projects().locations_queues_delete(QUEUE).doit()
        request = recorder.last
        assert request.method == "DELETE"
        assert request.content == b""
        assert "Content-Type" not in request.headers
        assert request.headers["Content-Length"] == "0"

    def test_typed_then_additional_then_alt(self, hub: CloudTasks, recorder) -> None:
        (
            hub.projects()
            .locations_queues_list(PARENT)
            .param("fields", "queues.name")
            .page_token("t")
            .page_size(10)
            .filter("state: PAUSED")
            .doit()
        )
        assert _query(recorder.last) == [
            ("filter", "state: PAUSED"),
            ("pageSize", "10"),
            ("pageToken", "t"),
            ("fields", "queues.name"),
            ("alt", "json"),
        ]

    def test_path_parameter_not_in_query(self, hub: CloudTasks, recorder) -> None:
        hub.projects().locations_queues_pause(PauseQueueRequest(), QUEUE).doit()
        assert str(recorder.last.url) == f"{BASE}{QUEUE}:pause?alt=json"

    def test_added_scopes_replace_default(
        self, hub: CloudTasks, recorder, token
    ) -> None:
        hub.projects().locations_get(PARENT).add_scope("s2").add_scope("s1").doit()
        assert token.calls == [["s1", "s2"]]

    def test_clear_scopes_restores_default(self, hub: CloudTasks, token) -> None:
        hub.projects().locations_get(PARENT).add_scopes(["x"]).clear_scopes().doit()
        assert token.calls == [[Scope.CLOUD_PLATFORM.value]]

    def test_user_agent_override(self, hub: CloudTasks, recorder) -> None:
        previous = hub.set_user_agent("my-tool/1.0")
        assert previous.startswith("apiary-python-client/")
        hub.projects().locations_get(PARENT).doit()
        assert recorder.last.headers["User-Agent"] == "my-tool/1.0"

    def test_base_url_override(self, hub: CloudTasks, recorder) -> None:
        assert hub.set_base_url("http://localhost:8080/") == "https://cloudtasks.googleapis.com/"
        hub.projects().locations_get(PARENT).doit()
        assert str(recorder.last.url) == f"http://localhost:8080/v2beta3/{PARENT}?alt=json"


# ---------------------------------------------------------------------------
# Builder semantics
# ---------------------------------------------------------------------------


class TestBuilder:
    def test_setters_do_not_modify_receiver(self, hub: CloudTasks, recorder) -> None:
        base = hub.projects().locations_queues_list(PARENT)
        sized = base.page_size(5)

        base.doit()
        sized.doit()

        assert _query(recorder.requests[0]) == [("alt", "json")]
        assert _query(recorder.requests[1]) == [("pageSize", "5"), ("alt", "json")]

    def test_builder_is_single_use(self, hub: CloudTasks) -> None:
        call = hub.projects().locations_get(PARENT)
        call.doit()
        with pytest.raises(CallConsumedError):
            call.doit()


class TestFieldClash:
    @pytest.mark.parametrize("name", ["alt", "readMask", "name"])
    def test_clash_raised_before_any_io(
        self, hub: CloudTasks, recorder, token, name: str
    ) -> None:
        delegate = RecordingDelegate()
        call = hub.projects().locations_queues_get(QUEUE).param(name, "x").delegate(delegate)

        with pytest.raises(FieldClash) as exc_info:
            call.doit()

        assert exc_info.value.field == name
        assert recorder.requests == []
        assert token.calls == []
        assert delegate.events[-1] == ("finished", False)

    def test_non_reserved_param_allowed(self, hub: CloudTasks, recorder) -> None:
        hub.projects().locations_queues_get(QUEUE).param("quotaUser", "me").doit()
        assert ("quotaUser", "me") in _query(recorder.last)


# ---------------------------------------------------------------------------
# Errors and retries
# ---------------------------------------------------------------------------


class TestErrors:
    def test_structured_error_is_bad_request(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(
            httpx.Response(404, json={"error": {"code": 404, "message": "Queue not found"}})
        )
        with pytest.raises(BadRequest) as exc_info:
            hub.projects().locations_queues_get(QUEUE).doit()
        assert exc_info.value.error.error.message == "Queue not found"
        assert exc_info.value.exit_code == 5
        assert len(recorder.requests) == 1

    def test_unstructured_error_is_failure(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(httpx.Response(502, text="<html>bad gateway</html>"))
        with pytest.raises(Failure) as exc_info:
            hub.projects().locations_queues_get(QUEUE).doit()
        assert exc_info.value.response.status_code == 502

    def test_transport_error(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(httpx.ConnectError("connection refused"))
        with pytest.raises(HttpError) as exc_info:
            hub.projects().locations_queues_get(QUEUE).doit()
        assert exc_info.value.exit_code == 6

    def test_decode_error(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(httpx.Response(200, text="not json"))
        delegate = RecordingDelegate()
        with pytest.raises(JsonDecodeError) as exc_info:
            hub.projects().locations_queues_get(QUEUE).delegate(delegate).doit()
        assert exc_info.value.text == "not json"
        assert ("decode_error", "not json") in delegate.events
        assert not any(event[0] == "finished" for event in delegate.events)

    def test_token_failure_is_missing_token(self, recorder, failing_token) -> None:
        hub = CloudTasks(recorder.client(), failing_token)
        with pytest.raises(MissingToken):
            hub.projects().locations_get(PARENT).doit()
        assert recorder.requests == []

    def test_delegate_can_supply_token(self, recorder, failing_token) -> None:
        hub = CloudTasks(recorder.client(), failing_token)
        delegate = RecordingDelegate(token="rescued")
        hub.projects().locations_get(PARENT).delegate(delegate).doit()
        assert recorder.last.headers["Authorization"] == "Bearer rescued"
        assert ("token", "TokenError") in delegate.events

    def test_no_authorization_header_without_token(self, recorder) -> None:
        from apiary.auth import NoToken

        CloudTasks(recorder.client(), NoToken()).projects().locations_get(PARENT).doit()
        assert "Authorization" not in recorder.last.headers


class TestRetries:
    def test_attempts_are_retries_plus_one(
        self, hub: CloudTasks, recorder, token
    ) -> None:
        recorder.reply(httpx.Response(503, text="unavailable"))
        with patch("apiary.common.call.time.sleep") as sleep:
            with pytest.raises(Failure):
                (
                    hub.projects()
                    .locations_queues_get(QUEUE)
                    .delegate(BackoffDelegate(max_retries=2))
                    .doit()
                )

        assert len(recorder.requests) == 3
        assert [r.headers["Authorization"] for r in recorder.requests] == [
            "Bearer token-1",
            "Bearer token-2",
            "Bearer token-3",
        ]
        assert len(token.calls) == 3
        assert [c.args[0] for c in sleep.call_args_list] == [1.0, 2.0]

    def test_retry_then_success(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(
            httpx.Response(429, json={"error": {"code": 429, "message": "slow down"}}),
            httpx.Response(200, json={"name": QUEUE}),
        )
        delegate = RecordingDelegate(decisions=[Retry.after(0.5)])
        with patch("apiary.common.call.time.sleep") as sleep:
            _, queue = hub.projects().locations_queues_get(QUEUE).delegate(delegate).doit()

        assert queue.name == QUEUE
        sleep.assert_called_once_with(0.5)
        assert [e[0] for e in delegate.events] == [
            "begin",
            "pre_request",
            "decide",
            "pre_request",
            "finished",
        ]
        assert delegate.events[-1] == ("finished", True)
        assert delegate.events[0] == (
            "begin",
            MethodInfo("cloudtasks.projects.locations.queues.get", "GET"),
        )

    def test_backoff_does_not_retry_client_errors(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(httpx.Response(400, json={"error": {"code": 400, "message": "bad"}}))
        with patch("apiary.common.call.time.sleep") as sleep:
            with pytest.raises(BadRequest):
                hub.projects().locations_queues_get(QUEUE).delegate(BackoffDelegate()).doit()
        sleep.assert_not_called()
        assert len(recorder.requests) == 1

    def test_backoff_retries_transport_errors(self, hub: CloudTasks, recorder) -> None:
        recorder.reply(httpx.ReadTimeout("slow"), httpx.Response(200, json={}))
        with patch("apiary.common.call.time.sleep"):
            hub.projects().locations_queues_get(QUEUE).delegate(BackoffDelegate(max_retries=1)).doit()
        assert len(recorder.requests) == 2


class TestHubContextManager:
    def test_exit_closes_client(self, recorder, token) -> None:
        client = recorder.client()
        with CloudTasks(client, token) as hub:
            assert hub.client is client
        assert client.is_closed
