"""Cloud Tasks API, version v2beta3.

Manages the execution of large numbers of distributed requests.

Example::

    import httpx
    from apiary.auth import StaticToken
    from apiary.apis.cloudtasks2_beta3 import CloudTasks, Queue

    with CloudTasks(httpx.Client(), StaticToken("ya29...")) as hub:
        _, queue = (
            hub.projects()
            .locations_queues_create(Queue(name="projects/p/locations/l/queues/q"),
                                     "projects/p/locations/l")
            .doit()
        )
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import Field

from apiary.common import CallBuilder, FieldMask, Hub, Schema
from apiary.common.schema import Bytes, Duration, Int64, Timestamp


class Scope(str, Enum):
    """OAuth2 scopes of this API."""

    # See, edit, configure, and delete your Google Cloud data and see the
    # email address for your Google Account.
    CLOUD_PLATFORM = "https://www.googleapis.com/auth/cloud-platform"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class AppEngineRouting(Schema):
    """App Engine routing of a task: the service, version and instance it is sent to."""

    host: Optional[str] = None
    instance: Optional[str] = None
    service: Optional[str] = None
    version: Optional[str] = None


class AppEngineHttpQueue(Schema):
    app_engine_routing_override: Optional[AppEngineRouting] = None


class AppEngineHttpRequest(Schema):
    """HTTP request delivered to an App Engine handler."""

    app_engine_routing: Optional[AppEngineRouting] = None
    body: Optional[Bytes] = None
    headers: Optional[dict[str, str]] = None
    http_method: Optional[str] = None
    relative_uri: Optional[str] = None


class OAuthToken(Schema):
    scope: Optional[str] = None
    service_account_email: Optional[str] = None


class OidcToken(Schema):
    audience: Optional[str] = None
    service_account_email: Optional[str] = None


class Header(Schema):
    key: Optional[str] = None
    value: Optional[str] = None


class HeaderOverride(Schema):
    header: Optional[Header] = None


class PathOverride(Schema):
    path: Optional[str] = None


class QueryOverride(Schema):
    query_params: Optional[str] = None


class UriOverride(Schema):
    """Rewrites parts of the target URI of every task in a queue."""

    host: Optional[str] = None
    path_override: Optional[PathOverride] = None
    port: Optional[Int64] = None
    query_override: Optional[QueryOverride] = None
    scheme: Optional[str] = None
    uri_override_enforce_mode: Optional[str] = None


class HttpTarget(Schema):
    header_overrides: Optional[list[HeaderOverride]] = None
    http_method: Optional[str] = None
    oauth_token: Optional[OAuthToken] = None
    oidc_token: Optional[OidcToken] = None
    uri_override: Optional[UriOverride] = None


class HttpRequest(Schema):
    """HTTP request sent to an arbitrary URL when a task is dispatched."""

    body: Optional[Bytes] = None
    headers: Optional[dict[str, str]] = None
    http_method: Optional[str] = None
    oauth_token: Optional[OAuthToken] = None
    oidc_token: Optional[OidcToken] = None
    url: Optional[str] = None


class PullMessage(Schema):
    payload: Optional[Bytes] = None
    tag: Optional[str] = None


class RateLimits(Schema):
    """Maximum rate at which tasks of a queue are dispatched."""

    max_burst_size: Optional[int] = None
    max_concurrent_dispatches: Optional[int] = None
    max_dispatches_per_second: Optional[float] = None


class RetryConfig(Schema):
    """How failed task attempts are retried."""

    max_attempts: Optional[int] = None
    max_backoff: Optional[Duration] = None
    max_doublings: Optional[int] = None
    max_retry_duration: Optional[Duration] = None
    min_backoff: Optional[Duration] = None


class StackdriverLoggingConfig(Schema):
    sampling_ratio: Optional[float] = None


class QueueStats(Schema):
    """Read-only statistics of a queue."""

    concurrent_dispatches_count: Optional[Int64] = None
    effective_execution_rate: Optional[float] = None
    executed_last_minute_count: Optional[Int64] = None
    oldest_estimated_arrival_time: Optional[Timestamp] = None
    tasks_count: Optional[Int64] = None


class Queue(Schema):
    """A queue is a container of related tasks.

    Used by: ``locations_queues_create`` (request and response),
    ``locations_queues_get``, ``locations_queues_patch``,
    ``locations_queues_pause``, ``locations_queues_purge``,
    ``locations_queues_resume`` (response).
    """

    app_engine_http_queue: Optional[AppEngineHttpQueue] = None
    http_target: Optional[HttpTarget] = None
    name: Optional[str] = None
    purge_time: Optional[Timestamp] = None
    rate_limits: Optional[RateLimits] = None
    retry_config: Optional[RetryConfig] = None
    stackdriver_logging_config: Optional[StackdriverLoggingConfig] = None
    state: Optional[str] = None
    stats: Optional[QueueStats] = None
    task_ttl: Optional[Duration] = None
    tombstone_ttl: Optional[Duration] = None
    type_: Optional[str] = Field(default=None, alias="type")


class Status(Schema):
    """Logical error model: a code, a message and details."""

    code: Optional[int] = None
    details: Optional[list[dict[str, Any]]] = None
    message: Optional[str] = None


class Attempt(Schema):
    dispatch_time: Optional[Timestamp] = None
    response_status: Optional[Status] = None
    response_time: Optional[Timestamp] = None
    schedule_time: Optional[Timestamp] = None


class Task(Schema):
    """A unit of scheduled work."""

    app_engine_http_request: Optional[AppEngineHttpRequest] = None
    create_time: Optional[Timestamp] = None
    dispatch_count: Optional[int] = None
    dispatch_deadline: Optional[Duration] = None
    first_attempt: Optional[Attempt] = None
    http_request: Optional[HttpRequest] = None
    last_attempt: Optional[Attempt] = None
    name: Optional[str] = None
    pull_message: Optional[PullMessage] = None
    response_count: Optional[int] = None
    schedule_time: Optional[Timestamp] = None
    view: Optional[str] = None


class CreateTaskRequest(Schema):
    response_view: Optional[str] = None
    task: Optional[Task] = None


class RunTaskRequest(Schema):
    response_view: Optional[str] = None


class PauseQueueRequest(Schema):
    pass


class PurgeQueueRequest(Schema):
    pass


class ResumeQueueRequest(Schema):
    pass


class Empty(Schema):
    """Returned by operations without a meaningful response."""


class Expr(Schema):
    description: Optional[str] = None
    expression: Optional[str] = None
    location: Optional[str] = None
    title: Optional[str] = None


class Binding(Schema):
    condition: Optional[Expr] = None
    members: Optional[list[str]] = None
    role: Optional[str] = None


class Policy(Schema):
    """An IAM policy: role bindings plus an etag for optimistic concurrency."""

    bindings: Optional[list[Binding]] = None
    etag: Optional[Bytes] = None
    version: Optional[int] = None


class GetPolicyOptions(Schema):
    requested_policy_version: Optional[int] = None


class GetIamPolicyRequest(Schema):
    options: Optional[GetPolicyOptions] = None


class SetIamPolicyRequest(Schema):
    policy: Optional[Policy] = None


class TestIamPermissionsRequest(Schema):
    permissions: Optional[list[str]] = None


class TestIamPermissionsResponse(Schema):
    permissions: Optional[list[str]] = None


class Location(Schema):
    display_name: Optional[str] = None
    labels: Optional[dict[str, str]] = None
    location_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    name: Optional[str] = None


class ListLocationsResponse(Schema):
    locations: Optional[list[Location]] = None
    next_page_token: Optional[str] = None


class ListQueuesResponse(Schema):
    next_page_token: Optional[str] = None
    queues: Optional[list[Queue]] = None


class ListTasksResponse(Schema):
    next_page_token: Optional[str] = None
    tasks: Optional[list[Task]] = None


# ---------------------------------------------------------------------------
# Hub
# ---------------------------------------------------------------------------


class CloudTasks(Hub):
    """Central instance to access all Cloud Tasks resources."""

    DEFAULT_BASE_URL = "https://cloudtasks.googleapis.com/"
    DEFAULT_ROOT_URL = "https://cloudtasks.googleapis.com/"

    def projects(self) -> ProjectMethods:
        return ProjectMethods(self)


# ---------------------------------------------------------------------------
# Method builder
# ---------------------------------------------------------------------------


class ProjectMethods:
    """Creates the call builders of all *project* resource operations.

    Not used directly, but through :meth:`CloudTasks.projects`.
    """

    def __init__(self, hub: CloudTasks) -> None:
        self._hub = hub

    def locations_get(self, name: str) -> ProjectLocationGetCall:
        """Gets information about a location.

        Args:
            name: Resource name for the location.
        """
        return ProjectLocationGetCall(self._hub, name=name)

    def locations_list(self, name: str) -> ProjectLocationListCall:
        """Lists information about the supported locations for this service.

        Args:
            name: The resource that owns the locations collection, if applicable.
        """
        return ProjectLocationListCall(self._hub, name=name)

    def locations_queues_create(self, request: Queue, parent: str) -> ProjectLocationQueueCreateCall:
        """Creates a queue.

        Queues created with this method allow tasks to live for a maximum of
        31 days. After a task is 31 days old, the task will be deleted
        regardless of whether it was dispatched or not.

        Args:
            request: The queue to create.
            parent: The location name in which the queue will be created,
                e.g. ``projects/PROJECT_ID/locations/LOCATION_ID``.
        """
        return ProjectLocationQueueCreateCall(self._hub, request, parent=parent)

    def locations_queues_delete(self, name: str) -> ProjectLocationQueueDeleteCall:
        """Deletes a queue, including all of its tasks."""
        return ProjectLocationQueueDeleteCall(self._hub, name=name)

    def locations_queues_get(self, name: str) -> ProjectLocationQueueGetCall:
        """Gets a queue."""
        return ProjectLocationQueueGetCall(self._hub, name=name)

    def locations_queues_get_iam_policy(
        self, request: GetIamPolicyRequest, resource: str
    ) -> ProjectLocationQueueGetIamPolicyCall:
        """Gets the access control policy for a queue."""
        return ProjectLocationQueueGetIamPolicyCall(self._hub, request, resource=resource)

    def locations_queues_list(self, parent: str) -> ProjectLocationQueueListCall:
        """Lists queues, in no particular order."""
        return ProjectLocationQueueListCall(self._hub, parent=parent)

    def locations_queues_patch(self, request: Queue, name: str) -> ProjectLocationQueuePatchCall:
        """Updates a queue, creating it if it does not exist."""
        return ProjectLocationQueuePatchCall(self._hub, request, name=name)

    def locations_queues_pause(
        self, request: PauseQueueRequest, name: str
    ) -> ProjectLocationQueuePauseCall:
        """Pauses the queue: tasks can be added but are not dispatched."""
        return ProjectLocationQueuePauseCall(self._hub, request, name=name)

    def locations_queues_purge(
        self, request: PurgeQueueRequest, name: str
    ) -> ProjectLocationQueuePurgeCall:
        """Deletes all tasks in a queue."""
        return ProjectLocationQueuePurgeCall(self._hub, request, name=name)

    def locations_queues_resume(
        self, request: ResumeQueueRequest, name: str
    ) -> ProjectLocationQueueResumeCall:
        """Resumes dispatching tasks of a paused or disabled queue."""
        return ProjectLocationQueueResumeCall(self._hub, request, name=name)

    def locations_queues_set_iam_policy(
        self, request: SetIamPolicyRequest, resource: str
    ) -> ProjectLocationQueueSetIamPolicyCall:
        """Replaces the access control policy of a queue."""
        return ProjectLocationQueueSetIamPolicyCall(self._hub, request, resource=resource)

    def locations_queues_test_iam_permissions(
        self, request: TestIamPermissionsRequest, resource: str
    ) -> ProjectLocationQueueTestIamPermissionCall:
        """Returns the subset of the given permissions the caller holds on a queue."""
        return ProjectLocationQueueTestIamPermissionCall(self._hub, request, resource=resource)

    def locations_queues_tasks_create(
        self, request: CreateTaskRequest, parent: str
    ) -> ProjectLocationQueueTaskCreateCall:
        """Creates a task and adds it to a queue.

        Args:
            request: The task and the response view.
            parent: The queue name, e.g.
                ``projects/PROJECT_ID/locations/LOCATION_ID/queues/QUEUE_ID``.
        """
        return ProjectLocationQueueTaskCreateCall(self._hub, request, parent=parent)

    def locations_queues_tasks_delete(self, name: str) -> ProjectLocationQueueTaskDeleteCall:
        return ProjectLocationQueueTaskDeleteCall(self._hub, name=name)

    def locations_queues_tasks_get(self, name: str) -> ProjectLocationQueueTaskGetCall:
        return ProjectLocationQueueTaskGetCall(self._hub, name=name)

    def locations_queues_tasks_list(self, parent: str) -> ProjectLocationQueueTaskListCall:
        return ProjectLocationQueueTaskListCall(self._hub, parent=parent)

    def locations_queues_tasks_run(
        self, request: RunTaskRequest, name: str
    ) -> ProjectLocationQueueTaskRunCall:
        """Forces a task to run now, regardless of its schedule."""
        return ProjectLocationQueueTaskRunCall(self._hub, request, name=name)


# ---------------------------------------------------------------------------
# Call builders
# ---------------------------------------------------------------------------


class _NameCall(CallBuilder):
    PATH_PARAMS = (("{+name}", "name"),)
    PARAMS: tuple[str, ...] = ("name",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def name(self, new_value: str):
        """The resource name. Already set by the method builder."""
        return self._set("name", new_value)


class _ParentCall(CallBuilder):
    PATH_PARAMS = (("{+parent}", "parent"),)
    PARAMS: tuple[str, ...] = ("parent",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def parent(self, new_value: str):
        """The parent resource name. Already set by the method builder."""
        return self._set("parent", new_value)


class _ResourceCall(CallBuilder):
    PATH_PARAMS = (("{+resource}", "resource"),)
    PARAMS: tuple[str, ...] = ("resource",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def resource(self, new_value: str):
        """The resource the policy applies to. Already set by the method builder."""
        return self._set("resource", new_value)


class ProjectLocationGetCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.get"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+name}"
    RESPONSE = Location


class ProjectLocationListCall(_NameCall):
    """Lists the supported locations. Supports ``filter``, ``page_size`` and ``page_token``."""

    METHOD_ID = "cloudtasks.projects.locations.list"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+name}/locations"
    PARAMS = ("name", "filter", "pageSize", "pageToken")
    RESPONSE = ListLocationsResponse

    def filter(self, new_value: str) -> ProjectLocationListCall:
        """A filter to narrow down results, e.g. ``displayName="tokyo"``."""
        return self._set("filter", new_value)

    def page_size(self, new_value: int) -> ProjectLocationListCall:
        return self._set("pageSize", new_value)

    def page_token(self, new_value: str) -> ProjectLocationListCall:
        return self._set("pageToken", new_value)


class ProjectLocationQueueCreateCall(_ParentCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.create"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+parent}/queues"
    RESPONSE = Queue


class ProjectLocationQueueDeleteCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.delete"
    HTTP_METHOD = "DELETE"
    PATH = "v2beta3/{+name}"
    RESPONSE = Empty


class ProjectLocationQueueGetCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.get"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+name}"
    PARAMS = ("name", "readMask")
    RESPONSE = Queue

    def read_mask(self, new_value: FieldMask) -> ProjectLocationQueueGetCall:
        """Limits the returned fields. ``name`` is always returned."""
        return self._set("readMask", new_value)


class ProjectLocationQueueGetIamPolicyCall(_ResourceCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.getIamPolicy"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+resource}:getIamPolicy"
    RESPONSE = Policy


class ProjectLocationQueueListCall(_ParentCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.list"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+parent}/queues"
    PARAMS = ("parent", "filter", "pageSize", "pageToken", "readMask")
    RESPONSE = ListQueuesResponse

    def filter(self, new_value: str) -> ProjectLocationQueueListCall:
        """``filter`` can be used to specify a subset of queues, e.g. ``state: PAUSED``."""
        return self._set("filter", new_value)

    def page_size(self, new_value: int) -> ProjectLocationQueueListCall:
        return self._set("pageSize", new_value)

    def page_token(self, new_value: str) -> ProjectLocationQueueListCall:
        return self._set("pageToken", new_value)

    def read_mask(self, new_value: FieldMask) -> ProjectLocationQueueListCall:
        return self._set("readMask", new_value)


class ProjectLocationQueuePatchCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.patch"
    HTTP_METHOD = "PATCH"
    PATH = "v2beta3/{+name}"
    PARAMS = ("name", "updateMask")
    RESPONSE = Queue

    def update_mask(self, new_value: FieldMask) -> ProjectLocationQueuePatchCall:
        """Which queue fields to update; all fields when unset."""
        return self._set("updateMask", new_value)


class ProjectLocationQueuePauseCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.pause"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+name}:pause"
    RESPONSE = Queue


class ProjectLocationQueuePurgeCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.purge"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+name}:purge"
    RESPONSE = Queue


class ProjectLocationQueueResumeCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.resume"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+name}:resume"
    RESPONSE = Queue


class ProjectLocationQueueSetIamPolicyCall(_ResourceCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.setIamPolicy"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+resource}:setIamPolicy"
    RESPONSE = Policy


class ProjectLocationQueueTestIamPermissionCall(_ResourceCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.testIamPermissions"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+resource}:testIamPermissions"
    RESPONSE = TestIamPermissionsResponse


class ProjectLocationQueueTaskCreateCall(_ParentCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.tasks.create"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+parent}/tasks"
    RESPONSE = Task


class ProjectLocationQueueTaskDeleteCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.tasks.delete"
    HTTP_METHOD = "DELETE"
    PATH = "v2beta3/{+name}"
    RESPONSE = Empty


class ProjectLocationQueueTaskGetCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.tasks.get"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+name}"
    PARAMS = ("name", "responseView")
    RESPONSE = Task

    def response_view(self, new_value: str) -> ProjectLocationQueueTaskGetCall:
        """``BASIC`` (default) or ``FULL``, which also returns the request body."""
        return self._set("responseView", new_value)


class ProjectLocationQueueTaskListCall(_ParentCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.tasks.list"
    HTTP_METHOD = "GET"
    PATH = "v2beta3/{+parent}/tasks"
    PARAMS = ("parent", "responseView", "pageSize", "pageToken")
    RESPONSE = ListTasksResponse

    def response_view(self, new_value: str) -> ProjectLocationQueueTaskListCall:
        return self._set("responseView", new_value)

    def page_size(self, new_value: int) -> ProjectLocationQueueTaskListCall:
        """Maximum page size, at most 1000."""
        return self._set("pageSize", new_value)

    def page_token(self, new_value: str) -> ProjectLocationQueueTaskListCall:
        return self._set("pageToken", new_value)


class ProjectLocationQueueTaskRunCall(_NameCall):
    METHOD_ID = "cloudtasks.projects.locations.queues.tasks.run"
    HTTP_METHOD = "POST"
    PATH = "v2beta3/{+name}:run"
    RESPONSE = Task
