"""The ``cloudtasks2-beta3`` command-line tool."""

from __future__ import annotations

from apiary.apis.cloudtasks2_beta3 import api
from apiary.cli import ApiCli, Arg, Command, ComplexType, JsonType, JsonTypeInfo, Param, run

_STRING = JsonTypeInfo(JsonType.STRING)
_STRING_VEC = JsonTypeInfo(JsonType.STRING, ComplexType.VEC)
_STRING_MAP = JsonTypeInfo(JsonType.STRING, ComplexType.MAP)
_INT = JsonTypeInfo(JsonType.INT)
_FLOAT = JsonTypeInfo(JsonType.FLOAT)

_NAME = Arg("name", "Required. The resource name.")
_PARENT = Arg("parent", "Required. The parent resource name.")
_RESOURCE = Arg("resource", "REQUIRED: The resource for which the policy is being requested.")

_QUEUE_FIELDS = {
    "app-engine-http-queue.app-engine-routing-override.host": (
        "appEngineHttpQueue.appEngineRoutingOverride.host", _STRING),
    "app-engine-http-queue.app-engine-routing-override.instance": (
        "appEngineHttpQueue.appEngineRoutingOverride.instance", _STRING),
    "app-engine-http-queue.app-engine-routing-override.service": (
        "appEngineHttpQueue.appEngineRoutingOverride.service", _STRING),
    "app-engine-http-queue.app-engine-routing-override.version": (
        "appEngineHttpQueue.appEngineRoutingOverride.version", _STRING),
    "http-target.http-method": ("httpTarget.httpMethod", _STRING),
    "http-target.oauth-token.scope": ("httpTarget.oauthToken.scope", _STRING),
    "http-target.oauth-token.service-account-email": (
        "httpTarget.oauthToken.serviceAccountEmail", _STRING),
    "http-target.oidc-token.audience": ("httpTarget.oidcToken.audience", _STRING),
    "http-target.oidc-token.service-account-email": (
        "httpTarget.oidcToken.serviceAccountEmail", _STRING),
    "http-target.uri-override.host": ("httpTarget.uriOverride.host", _STRING),
    "http-target.uri-override.path-override.path": (
        "httpTarget.uriOverride.pathOverride.path", _STRING),
    "http-target.uri-override.port": ("httpTarget.uriOverride.port", _STRING),
    "http-target.uri-override.query-override.query-params": (
        "httpTarget.uriOverride.queryOverride.queryParams", _STRING),
    "http-target.uri-override.scheme": ("httpTarget.uriOverride.scheme", _STRING),
    "http-target.uri-override.uri-override-enforce-mode": (
        "httpTarget.uriOverride.uriOverrideEnforceMode", _STRING),
    "name": ("name", _STRING),
    "purge-time": ("purgeTime", _STRING),
    "rate-limits.max-burst-size": ("rateLimits.maxBurstSize", _INT),
    "rate-limits.max-concurrent-dispatches": ("rateLimits.maxConcurrentDispatches", _INT),
    "rate-limits.max-dispatches-per-second": ("rateLimits.maxDispatchesPerSecond", _FLOAT),
    "retry-config.max-attempts": ("retryConfig.maxAttempts", _INT),
    "retry-config.max-backoff": ("retryConfig.maxBackoff", _STRING),
    "retry-config.max-doublings": ("retryConfig.maxDoublings", _INT),
    "retry-config.max-retry-duration": ("retryConfig.maxRetryDuration", _STRING),
    "retry-config.min-backoff": ("retryConfig.minBackoff", _STRING),
    "stackdriver-logging-config.sampling-ratio": (
        "stackdriverLoggingConfig.samplingRatio", _FLOAT),
    "state": ("state", _STRING),
    "stats.concurrent-dispatches-count": ("stats.concurrentDispatchesCount", _STRING),
    "stats.effective-execution-rate": ("stats.effectiveExecutionRate", _FLOAT),
    "stats.executed-last-minute-count": ("stats.executedLastMinuteCount", _STRING),
    "stats.oldest-estimated-arrival-time": ("stats.oldestEstimatedArrivalTime", _STRING),
    "stats.tasks-count": ("stats.tasksCount", _STRING),
    "task-ttl": ("taskTtl", _STRING),
    "tombstone-ttl": ("tombstoneTtl", _STRING),
    "type": ("type", _STRING),
}

_CREATE_TASK_FIELDS = {
    "response-view": ("responseView", _STRING),
    "task.app-engine-http-request.app-engine-routing.host": (
        "task.appEngineHttpRequest.appEngineRouting.host", _STRING),
    "task.app-engine-http-request.app-engine-routing.instance": (
        "task.appEngineHttpRequest.appEngineRouting.instance", _STRING),
    "task.app-engine-http-request.app-engine-routing.service": (
        "task.appEngineHttpRequest.appEngineRouting.service", _STRING),
    "task.app-engine-http-request.app-engine-routing.version": (
        "task.appEngineHttpRequest.appEngineRouting.version", _STRING),
    "task.app-engine-http-request.body": ("task.appEngineHttpRequest.body", _STRING),
    "task.app-engine-http-request.headers": ("task.appEngineHttpRequest.headers", _STRING_MAP),
    "task.app-engine-http-request.http-method": ("task.appEngineHttpRequest.httpMethod", _STRING),
    "task.app-engine-http-request.relative-uri": (
        "task.appEngineHttpRequest.relativeUri", _STRING),
    "task.create-time": ("task.createTime", _STRING),
    "task.dispatch-count": ("task.dispatchCount", _INT),
    "task.dispatch-deadline": ("task.dispatchDeadline", _STRING),
    "task.http-request.body": ("task.httpRequest.body", _STRING),
    "task.http-request.headers": ("task.httpRequest.headers", _STRING_MAP),
    "task.http-request.http-method": ("task.httpRequest.httpMethod", _STRING),
    "task.http-request.oauth-token.scope": ("task.httpRequest.oauthToken.scope", _STRING),
    "task.http-request.oauth-token.service-account-email": (
        "task.httpRequest.oauthToken.serviceAccountEmail", _STRING),
    "task.http-request.oidc-token.audience": ("task.httpRequest.oidcToken.audience", _STRING),
    "task.http-request.oidc-token.service-account-email": (
        "task.httpRequest.oidcToken.serviceAccountEmail", _STRING),
    "task.http-request.url": ("task.httpRequest.url", _STRING),
    "task.name": ("task.name", _STRING),
    "task.pull-message.payload": ("task.pullMessage.payload", _STRING),
    "task.pull-message.tag": ("task.pullMessage.tag", _STRING),
    "task.response-count": ("task.responseCount", _INT),
    "task.schedule-time": ("task.scheduleTime", _STRING),
    "task.view": ("task.view", _STRING),
}

_GET_IAM_POLICY_FIELDS = {
    "options.requested-policy-version": ("options.requestedPolicyVersion", _INT),
}

_SET_IAM_POLICY_FIELDS = {
    "policy.etag": ("policy.etag", _STRING),
    "policy.version": ("policy.version", _INT),
}

_TEST_IAM_PERMISSIONS_FIELDS = {
    "permissions": ("permissions", _STRING_VEC),
}

_PAGING_PARAMS = {
    "page-size": Param("page_size", "int32"),
    "page-token": Param("page_token"),
}

COMMANDS = (
    Command(
        "projects", "locations-get", "locations_get",
        about="Gets information about a location.",
        args=(Arg("name", "Resource name for the location."),),
    ),
    Command(
        "projects", "locations-list", "locations_list",
        about="Lists information about the supported locations for this service.",
        args=(Arg("name", "The resource that owns the locations collection, if applicable."),),
        params={"filter": Param("filter"), **_PAGING_PARAMS},
    ),
    Command(
        "projects", "locations-queues-create", "locations_queues_create",
        about="Creates a queue.",
        args=(Arg("parent", "Required. The location name in which the queue will be created."),),
        request=api.Queue,
        fields=_QUEUE_FIELDS,
    ),
    Command(
        "projects", "locations-queues-delete", "locations_queues_delete",
        about="Deletes a queue.",
        args=(_NAME,),
    ),
    Command(
        "projects", "locations-queues-get", "locations_queues_get",
        about="Gets a queue.",
        args=(_NAME,),
        params={"read-mask": Param("read_mask", "google-fieldmask")},
    ),
    Command(
        "projects", "locations-queues-get-iam-policy", "locations_queues_get_iam_policy",
        about="Gets the access control policy for a Queue.",
        args=(_RESOURCE,),
        request=api.GetIamPolicyRequest,
        fields=_GET_IAM_POLICY_FIELDS,
    ),
    Command(
        "projects", "locations-queues-list", "locations_queues_list",
        about="Lists queues.",
        args=(Arg("parent", "Required. The location name."),),
        params={
            "filter": Param("filter"),
            **_PAGING_PARAMS,
            "read-mask": Param("read_mask", "google-fieldmask"),
        },
    ),
    Command(
        "projects", "locations-queues-patch", "locations_queues_patch",
        about="Updates a queue.",
        args=(Arg("name", "Caller-specified and required in CreateQueue."),),
        request=api.Queue,
        fields=_QUEUE_FIELDS,
        params={"update-mask": Param("update_mask", "google-fieldmask")},
    ),
    Command(
        "projects", "locations-queues-pause", "locations_queues_pause",
        about="Pauses the queue.",
        args=(_NAME,),
        request=api.PauseQueueRequest,
    ),
    Command(
        "projects", "locations-queues-purge", "locations_queues_purge",
        about="Purges a queue by deleting all of its tasks.",
        args=(_NAME,),
        request=api.PurgeQueueRequest,
    ),
    Command(
        "projects", "locations-queues-resume", "locations_queues_resume",
        about="Resume a queue.",
        args=(_NAME,),
        request=api.ResumeQueueRequest,
    ),
    Command(
        "projects", "locations-queues-set-iam-policy", "locations_queues_set_iam_policy",
        about="Sets the access control policy for a Queue.",
        args=(Arg("resource", "REQUIRED: The resource for which the policy is being specified."),),
        request=api.SetIamPolicyRequest,
        fields=_SET_IAM_POLICY_FIELDS,
    ),
    Command(
        "projects", "locations-queues-test-iam-permissions",
        "locations_queues_test_iam_permissions",
        about="Returns permissions that a caller has on a Queue.",
        args=(Arg("resource", "REQUIRED: The resource for which the policy detail is being requested."),),
        request=api.TestIamPermissionsRequest,
        fields=_TEST_IAM_PERMISSIONS_FIELDS,
    ),
    Command(
        "projects", "locations-queues-tasks-create", "locations_queues_tasks_create",
        about="Creates a task and adds it to a queue.",
        args=(Arg("parent", "Required. The queue name."),),
        request=api.CreateTaskRequest,
        fields=_CREATE_TASK_FIELDS,
    ),
    Command(
        "projects", "locations-queues-tasks-delete", "locations_queues_tasks_delete",
        about="Deletes a task.",
        args=(Arg("name", "Required. The task name."),),
    ),
    Command(
        "projects", "locations-queues-tasks-get", "locations_queues_tasks_get",
        about="Gets a task.",
        args=(Arg("name", "Required. The task name."),),
        params={"response-view": Param("response_view")},
    ),
    Command(
        "projects", "locations-queues-tasks-list", "locations_queues_tasks_list",
        about="Lists the tasks in a queue.",
        args=(Arg("parent", "Required. The queue name."),),
        params={"response-view": Param("response_view"), **_PAGING_PARAMS},
    ),
    Command(
        "projects", "locations-queues-tasks-run", "locations_queues_tasks_run",
        about="Forces a task to run now.",
        args=(Arg("name", "Required. The task name."),),
        request=api.RunTaskRequest,
        fields={"response-view": ("responseView", _STRING)},
    ),
)

CLI = ApiCli(
    name="cloudtasks2-beta3",
    version="6.0.0+20240607",
    about="Manages the execution of large numbers of distributed requests.",
    hub=api.CloudTasks,
    commands=COMMANDS,
    groups={"projects": "Methods on the *project* resources."},
)


def main() -> None:
    run(CLI)


if __name__ == "__main__":
    main()
