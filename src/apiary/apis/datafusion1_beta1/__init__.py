"""Cloud Data Fusion API v1beta1: client library and ``datafusion1-beta1`` tool."""

from apiary.apis.datafusion1_beta1.api import (
    DataFusion,
    DnsPeering,
    Instance,
    ListInstancesResponse,
    Operation,
    Policy,
    ProjectMethods,
    Scope,
    SetIamPolicyRequest,
    Version,
)

__all__ = [
    "DataFusion",
    "DnsPeering",
    "Instance",
    "ListInstancesResponse",
    "Operation",
    "Policy",
    "ProjectMethods",
    "Scope",
    "SetIamPolicyRequest",
    "Version",
]
