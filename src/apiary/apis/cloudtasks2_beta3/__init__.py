"""Cloud Tasks API v2beta3: client library and ``cloudtasks2-beta3`` tool."""

from apiary.apis.cloudtasks2_beta3.api import (
    CloudTasks,
    CreateTaskRequest,
    GetIamPolicyRequest,
    ListLocationsResponse,
    ListQueuesResponse,
    ListTasksResponse,
    Location,
    Policy,
    ProjectMethods,
    Queue,
    RateLimits,
    RetryConfig,
    Scope,
    SetIamPolicyRequest,
    Task,
    TestIamPermissionsRequest,
    TestIamPermissionsResponse,
)

__all__ = [
    "CloudTasks",
    "CreateTaskRequest",
    "GetIamPolicyRequest",
    "ListLocationsResponse",
    "ListQueuesResponse",
    "ListTasksResponse",
    "Location",
    "Policy",
    "ProjectMethods",
    "Queue",
    "RateLimits",
    "RetryConfig",
    "Scope",
    "SetIamPolicyRequest",
    "Task",
    "TestIamPermissionsRequest",
    "TestIamPermissionsResponse",
]
