"""Tests for the Cloud Tasks v2beta3 API surface."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from apiary.apis.cloudtasks2_beta3 import api
from apiary.apis.cloudtasks2_beta3.api import CloudTasks, Scope
from apiary.common.field_mask import FieldMask

ROOT = "https://cloudtasks.googleapis.com/v2beta3/"
LOCATION = "projects/p/locations/l"
QUEUE = f"{LOCATION}/queues/q"
TASK = f"{QUEUE}/tasks/t"


@pytest.fixture()
def hub(make_hub) -> CloudTasks:
    return make_hub(CloudTasks)


# (builder, HTTP method, path after the version prefix, has body)
OPERATIONS = [
    ("locations-get", lambda m: m.locations_get(LOCATION), "GET", LOCATION, False),
    ("locations-list", lambda m: m.locations_list("projects/p"), "GET", "projects/p/locations", False),
    ("queues-create", lambda m: m.locations_queues_create(api.Queue(), LOCATION), "POST",
     f"{LOCATION}/queues", True),
    ("queues-delete", lambda m: m.locations_queues_delete(QUEUE), "DELETE", QUEUE, False),
    ("queues-get", lambda m: m.locations_queues_get(QUEUE), "GET", QUEUE, False),
    ("queues-get-iam-policy",
     lambda m: m.locations_queues_get_iam_policy(api.GetIamPolicyRequest(), QUEUE),
     "POST", f"{QUEUE}:getIamPolicy", True),
    ("queues-list", lambda m: m.locations_queues_list(LOCATION), "GET", f"{LOCATION}/queues", False),
    ("queues-patch", lambda m: m.locations_queues_patch(api.Queue(), QUEUE), "PATCH", QUEUE, True),
    ("queues-pause", lambda m: m.locations_queues_pause(api.PauseQueueRequest(), QUEUE), "POST",
     f"{QUEUE}:pause", True),
    ("queues-purge", lambda m: m.locations_queues_purge(api.PurgeQueueRequest(), QUEUE), "POST",
     f"{QUEUE}:purge", True),
    ("queues-resume", lambda m: m.locations_queues_resume(api.ResumeQueueRequest(), QUEUE), "POST",
     f"{QUEUE}:resume", True),
    ("queues-set-iam-policy",
     lambda m: m.locations_queues_set_iam_policy(api.SetIamPolicyRequest(), QUEUE),
     "POST", f"{QUEUE}:setIamPolicy", True),
    ("queues-test-iam-permissions",
     lambda m: m.locations_queues_test_iam_permissions(api.TestIamPermissionsRequest(), QUEUE),
     "POST", f"{QUEUE}:testIamPermissions", True),
    ("tasks-create", lambda m: m.locations_queues_tasks_create(api.CreateTaskRequest(), QUEUE),
     "POST", f"{QUEUE}/tasks", True),
    ("tasks-delete", lambda m: m.locations_queues_tasks_delete(TASK), "DELETE", TASK, False),
    ("tasks-get", lambda m: m.locations_queues_tasks_get(TASK), "GET", TASK, False),
    ("tasks-list", lambda m: m.locations_queues_tasks_list(QUEUE), "GET", f"{QUEUE}/tasks", False),
    ("tasks-run", lambda m: m.locations_queues_tasks_run(api.RunTaskRequest(), TASK), "POST",
     f"{TASK}:run", True),
]


@pytest.mark.parametrize(
    "build,http_method,path,has_body",
    [pytest.param(*op[1:], id=op[0]) for op in OPERATIONS],
)
def test_operation_request_shape(hub, recorder, token, build, http_method, path, has_body) -> None:
    build(hub.projects()).doit()
    request = recorder.last
    assert request.method == http_method
    assert str(request.url) == f"{ROOT}{path}?alt=json"
    assert request.headers["authorization"] == "Bearer token-1"
    if has_body:
        assert request.headers["content-type"] == "application/json"
        assert request.content == b"{}"
    else:
        assert request.content == b""
    assert token.calls == [[Scope.CLOUD_PLATFORM.value]]


def test_every_operation_is_covered() -> None:
    assert len(OPERATIONS) == 18


class TestTypedParameters:
    def test_list_queues_parameter_order(self, hub, recorder) -> None:
        (
            hub.projects()
            .locations_queues_list(LOCATION)
            .read_mask(FieldMask(["name", "rate_limits"]))
            .page_token("next")
            .page_size(50)
            .filter("state = PAUSED")
            .doit()
        )
        assert list(recorder.last.url.params.multi_items()) == [
            ("filter", "state = PAUSED"),
            ("pageSize", "50"),
            ("pageToken", "next"),
            ("readMask", "name,rateLimits"),
            ("alt", "json"),
        ]

    def test_tasks_get_response_view(self, hub, recorder) -> None:
        hub.projects().locations_queues_tasks_get(TASK).response_view("FULL").doit()
        assert recorder.last.url.params["responseView"] == "FULL"

    def test_patch_update_mask(self, hub, recorder) -> None:
        queue = api.Queue(retry_config=api.RetryConfig(max_backoff=timedelta(minutes=1)))
        hub.projects().locations_queues_patch(queue, QUEUE).update_mask(
            FieldMask(["retry_config.max_backoff"])
        ).doit()
        assert recorder.last.url.params["updateMask"] == "retryConfig.maxBackoff"
        assert recorder.body() == {"retryConfig": {"maxBackoff": "60s"}}


class TestResponses:
    def test_task_decoded(self, hub, recorder) -> None:
        recorder.reply(
            httpx.Response(
                200,
                json={
                    "name": TASK,
                    "dispatchCount": 2,
                    "dispatchDeadline": "600s",
                    "httpRequest": {"url": "https://example.com", "body": "aGk="},
                },
            )
        )
        _, task = hub.projects().locations_queues_tasks_get(TASK).doit()
        assert isinstance(task, api.Task)
        assert task.dispatch_count == 2
        assert task.dispatch_deadline == timedelta(minutes=10)
        assert task.http_request.body == b"hi"

    def test_create_task_body(self, hub, recorder) -> None:
        request = api.CreateTaskRequest(
            task=api.Task(
                http_request=api.HttpRequest(
                    url="https://example.com/work",
                    http_method="POST",
                    headers={"X-Kind": "batch"},
                    body=b"payload",
                )
            )
        )
        hub.projects().locations_queues_tasks_create(request, QUEUE).doit()
        assert recorder.body() == {
            "task": {
                "httpRequest": {
                    "body": "cGF5bG9hZA==",
                    "headers": {"X-Kind": "batch"},
                    "httpMethod": "POST",
                    "url": "https://example.com/work",
                }
            }
        }

    def test_list_tasks_decoded(self, hub, recorder) -> None:
        recorder.reply(
            httpx.Response(200, json={"tasks": [{"name": TASK}], "nextPageToken": "abc"})
        )
        _, page = hub.projects().locations_queues_tasks_list(QUEUE).doit()
        assert [task.name for task in page.tasks] == [TASK]
        assert page.next_page_token == "abc"

    def test_empty_response(self, hub, recorder) -> None:
        _, value = hub.projects().locations_queues_delete(QUEUE).doit()
        assert isinstance(value, api.Empty)


class TestUrlEncoding:
    def test_reserved_characters_in_name_stay_literal(self, hub, recorder) -> None:
        hub.projects().locations_queues_get(f"{LOCATION}/queues/a:b@c").doit()
        assert recorder.last.url.raw_path == (
            b"/v2beta3/projects/p/locations/l/queues/a:b@c?alt=json"
        )

    def test_query_values_are_encoded(self, hub, recorder) -> None:
        (
            hub.projects()
            .locations_queues_list(LOCATION)
            .filter("state = PAUSED & name=x")
            .param("custom", "a,b")
            .doit()
        )
        assert list(recorder.last.url.params.multi_items()) == [
            ("filter", "state = PAUSED & name=x"),
            ("custom", "a,b"),
            ("alt", "json"),
        ]
