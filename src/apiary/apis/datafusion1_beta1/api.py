"""Cloud Data Fusion API, version v1beta1.

Cloud Data Fusion is a fully-managed, cloud native, enterprise data
integration service for quickly building and managing data pipelines.

Most mutating operations are long-running and return an
:class:`Operation`; poll it with ``locations_operations_get``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import Field

from apiary.common import CallBuilder, FieldMask, Hub, Schema
from apiary.common.schema import Bytes, Timestamp


class Scope(str, Enum):
    CLOUD_PLATFORM = "https://www.googleapis.com/auth/cloud-platform"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class Accelerator(Schema):
    """An add-on capability of an instance, e.g. ``CDC`` or ``HEALTHCARE``."""

    accelerator_type: Optional[str] = None
    state: Optional[str] = None


class CryptoKeyConfig(Schema):
    key_reference: Optional[str] = None


class EventPublishConfig(Schema):
    enabled: Optional[bool] = None
    topic: Optional[str] = None


class TimeWindow(Schema):
    end_time: Optional[str] = None
    start_time: Optional[str] = None


class RecurringTimeWindow(Schema):
    recurrence: Optional[str] = None
    window: Optional[TimeWindow] = None


class MaintenanceWindow(Schema):
    recurring_time_window: Optional[RecurringTimeWindow] = None


class MaintenancePolicy(Schema):
    maintenance_exclusion_window: Optional[TimeWindow] = None
    maintenance_window: Optional[MaintenanceWindow] = None


class PrivateServiceConnectConfig(Schema):
    effective_unreachable_cidr_block: Optional[str] = None
    network_attachment: Optional[str] = None
    unreachable_cidr_block: Optional[str] = None


class NetworkConfig(Schema):
    """Network the instance is peered with, for private instances."""

    connection_type: Optional[str] = None
    ip_allocation: Optional[str] = None
    network: Optional[str] = None
    private_service_connect_config: Optional[PrivateServiceConnectConfig] = None


class Version(Schema):
    available_features: Optional[list[str]] = None
    default_version: Optional[bool] = None
    type_: Optional[str] = Field(default=None, alias="type")
    version_number: Optional[str] = None


class Instance(Schema):
    """Represents a Data Fusion instance.

    Used by: ``locations_instances_create`` (request),
    ``locations_instances_get``, ``locations_instances_patch`` (request).
    """

    accelerators: Optional[list[Accelerator]] = None
    api_endpoint: Optional[str] = None
    available_version: Optional[list[Version]] = None
    create_time: Optional[Timestamp] = None
    crypto_key_config: Optional[CryptoKeyConfig] = None
    dataplex_data_lineage_integration_enabled: Optional[bool] = None
    dataproc_service_account: Optional[str] = None
    description: Optional[str] = None
    disabled_reason: Optional[list[str]] = None
    display_name: Optional[str] = None
    enable_rbac: Optional[bool] = None
    enable_stackdriver_logging: Optional[bool] = None
    enable_stackdriver_monitoring: Optional[bool] = None
    enable_zone_separation: Optional[bool] = None
    event_publish_config: Optional[EventPublishConfig] = None
    gcs_bucket: Optional[str] = None
    labels: Optional[dict[str, str]] = None
    maintenance_policy: Optional[MaintenancePolicy] = None
    name: Optional[str] = None
    network_config: Optional[NetworkConfig] = None
    options: Optional[dict[str, str]] = None
    p4_service_account: Optional[str] = None
    patch_revision: Optional[str] = None
    private_instance: Optional[bool] = None
    satisfies_pzs: Optional[bool] = None
    service_account: Optional[str] = None
    service_endpoint: Optional[str] = None
    state: Optional[str] = None
    state_message: Optional[str] = None
    tenant_project_id: Optional[str] = None
    type_: Optional[str] = Field(default=None, alias="type")
    update_time: Optional[Timestamp] = None
    version: Optional[str] = None
    workforce_identity_service_endpoint: Optional[str] = None
    zone: Optional[str] = None


class DnsPeering(Schema):
    """DNS peering configuration. Lets the instance resolve names in a customer network."""

    description: Optional[str] = None
    domain: Optional[str] = None
    name: Optional[str] = None
    target_network: Optional[str] = None
    target_project: Optional[str] = None


class ListDnsPeeringsResponse(Schema):
    dns_peerings: Optional[list[DnsPeering]] = None
    next_page_token: Optional[str] = None


class ListInstancesResponse(Schema):
    instances: Optional[list[Instance]] = None
    next_page_token: Optional[str] = None
    unreachable: Optional[list[str]] = None


class ListAvailableVersionsResponse(Schema):
    available_versions: Optional[list[Version]] = None
    next_page_token: Optional[str] = None
    versions: Optional[list[Version]] = None


class Status(Schema):
    code: Optional[int] = None
    details: Optional[list[dict[str, Any]]] = None
    message: Optional[str] = None


class Operation(Schema):
    """A long-running operation.

    ``response`` is set once ``done`` is true and the operation succeeded,
    ``error`` when it failed.
    """

    done: Optional[bool] = None
    error: Optional[Status] = None
    metadata: Optional[dict[str, Any]] = None
    name: Optional[str] = None
    response: Optional[dict[str, Any]] = None


class ListOperationsResponse(Schema):
    next_page_token: Optional[str] = None
    operations: Optional[list[Operation]] = None


class Location(Schema):
    display_name: Optional[str] = None
    labels: Optional[dict[str, str]] = None
    location_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    name: Optional[str] = None


class ListLocationsResponse(Schema):
    locations: Optional[list[Location]] = None
    next_page_token: Optional[str] = None


class Expr(Schema):
    description: Optional[str] = None
    expression: Optional[str] = None
    location: Optional[str] = None
    title: Optional[str] = None


class Binding(Schema):
    condition: Optional[Expr] = None
    members: Optional[list[str]] = None
    role: Optional[str] = None


class AuditLogConfig(Schema):
    exempted_members: Optional[list[str]] = None
    log_type: Optional[str] = None


class AuditConfig(Schema):
    audit_log_configs: Optional[list[AuditLogConfig]] = None
    service: Optional[str] = None


class Policy(Schema):
    """An IAM policy."""

    audit_configs: Optional[list[AuditConfig]] = None
    bindings: Optional[list[Binding]] = None
    etag: Optional[Bytes] = None
    version: Optional[int] = None


class Namespace(Schema):
    """A CDAP namespace of an instance, with its IAM policy when requested."""

    iam_policy: Optional[Policy] = None
    name: Optional[str] = None


class ListNamespacesResponse(Schema):
    namespaces: Optional[list[Namespace]] = None
    next_page_token: Optional[str] = None


class SetIamPolicyRequest(Schema):
    policy: Optional[Policy] = None
    update_mask: Optional[FieldMask] = None


class TestIamPermissionsRequest(Schema):
    permissions: Optional[list[str]] = None


class TestIamPermissionsResponse(Schema):
    permissions: Optional[list[str]] = None


class RestartInstanceRequest(Schema):
    pass


class UpgradeInstanceRequest(Schema):
    pass


class CancelOperationRequest(Schema):
    pass


class RemoveIamPolicyRequest(Schema):
    pass


class RemoveIamPolicyResponse(Schema):
    pass


class Empty(Schema):
    pass


# ---------------------------------------------------------------------------
# Hub
# ---------------------------------------------------------------------------


class DataFusion(Hub):
    """Central instance to access all Data Fusion resources."""

    DEFAULT_BASE_URL = "https://datafusion.googleapis.com/"
    DEFAULT_ROOT_URL = "https://datafusion.googleapis.com/"

    def projects(self) -> ProjectMethods:
        return ProjectMethods(self)


# ---------------------------------------------------------------------------
# Method builder
# ---------------------------------------------------------------------------


class ProjectMethods:
    """Creates the call builders of all *project* resource operations."""

    def __init__(self, hub: DataFusion) -> None:
        self._hub = hub

    def locations_get(self, name: str) -> ProjectLocationGetCall:
        return ProjectLocationGetCall(self._hub, name=name)

    def locations_list(self, name: str) -> ProjectLocationListCall:
        return ProjectLocationListCall(self._hub, name=name)

    def locations_instances_create(
        self, request: Instance, parent: str
    ) -> ProjectLocationInstanceCreateCall:
        """Creates a new Data Fusion instance in the specified project and location.

        Args:
            request: The instance to create.
            parent: ``projects/{project}/locations/{location}``.
        """
        return ProjectLocationInstanceCreateCall(self._hub, request, parent=parent)

    def locations_instances_delete(self, name: str) -> ProjectLocationInstanceDeleteCall:
        return ProjectLocationInstanceDeleteCall(self._hub, name=name)

    def locations_instances_dns_peerings_create(
        self, request: DnsPeering, parent: str
    ) -> ProjectLocationInstanceDnsPeeringCreateCall:
        """Creates DNS peering on the given resource."""
        return ProjectLocationInstanceDnsPeeringCreateCall(self._hub, request, parent=parent)

    def locations_instances_dns_peerings_delete(
        self, name: str
    ) -> ProjectLocationInstanceDnsPeeringDeleteCall:
        return ProjectLocationInstanceDnsPeeringDeleteCall(self._hub, name=name)

    def locations_instances_dns_peerings_list(
        self, parent: str
    ) -> ProjectLocationInstanceDnsPeeringListCall:
        return ProjectLocationInstanceDnsPeeringListCall(self._hub, parent=parent)

    def locations_instances_get(self, name: str) -> ProjectLocationInstanceGetCall:
        return ProjectLocationInstanceGetCall(self._hub, name=name)

    def locations_instances_get_iam_policy(
        self, resource: str
    ) -> ProjectLocationInstanceGetIamPolicyCall:
        """Gets the access control policy for an instance.

        Returns an empty policy if the instance exists and does not have a
        policy set.
        """
        return ProjectLocationInstanceGetIamPolicyCall(self._hub, resource=resource)

    def locations_instances_list(self, parent: str) -> ProjectLocationInstanceListCall:
        """Lists Data Fusion instances; ``-`` as the location lists all regions."""
        return ProjectLocationInstanceListCall(self._hub, parent=parent)

    def locations_instances_namespaces_get_iam_policy(
        self, resource: str
    ) -> ProjectLocationInstanceNamespaceGetIamPolicyCall:
        return ProjectLocationInstanceNamespaceGetIamPolicyCall(self._hub, resource=resource)

    def locations_instances_namespaces_list(
        self, parent: str
    ) -> ProjectLocationInstanceNamespaceListCall:
        return ProjectLocationInstanceNamespaceListCall(self._hub, parent=parent)

    def locations_instances_namespaces_set_iam_policy(
        self, request: SetIamPolicyRequest, resource: str
    ) -> ProjectLocationInstanceNamespaceSetIamPolicyCall:
        return ProjectLocationInstanceNamespaceSetIamPolicyCall(
            self._hub, request, resource=resource
        )

    def locations_instances_namespaces_test_iam_permissions(
        self, request: TestIamPermissionsRequest, resource: str
    ) -> ProjectLocationInstanceNamespaceTestIamPermissionCall:
        return ProjectLocationInstanceNamespaceTestIamPermissionCall(
            self._hub, request, resource=resource
        )

    def locations_instances_patch(
        self, request: Instance, name: str
    ) -> ProjectLocationInstancePatchCall:
        """Updates a single Data Fusion instance."""
        return ProjectLocationInstancePatchCall(self._hub, request, name=name)

    def locations_instances_restart(
        self, request: RestartInstanceRequest, name: str
    ) -> ProjectLocationInstanceRestartCall:
        return ProjectLocationInstanceRestartCall(self._hub, request, name=name)

    def locations_instances_set_iam_policy(
        self, request: SetIamPolicyRequest, resource: str
    ) -> ProjectLocationInstanceSetIamPolicyCall:
        return ProjectLocationInstanceSetIamPolicyCall(self._hub, request, resource=resource)

    def locations_instances_test_iam_permissions(
        self, request: TestIamPermissionsRequest, resource: str
    ) -> ProjectLocationInstanceTestIamPermissionCall:
        return ProjectLocationInstanceTestIamPermissionCall(self._hub, request, resource=resource)

    def locations_instances_upgrade(
        self, request: UpgradeInstanceRequest, name: str
    ) -> ProjectLocationInstanceUpgradeCall:
        """Upgrades an instance to the latest stable version."""
        return ProjectLocationInstanceUpgradeCall(self._hub, request, name=name)

    def locations_operations_cancel(
        self, request: CancelOperationRequest, name: str
    ) -> ProjectLocationOperationCancelCall:
        """Starts asynchronous cancellation on a long-running operation.

        Success is not guaranteed. A cancelled operation is not deleted;
        it gets an ``error`` with code 1 (``CANCELLED``).
        """
        return ProjectLocationOperationCancelCall(self._hub, request, name=name)

    def locations_operations_delete(self, name: str) -> ProjectLocationOperationDeleteCall:
        return ProjectLocationOperationDeleteCall(self._hub, name=name)

    def locations_operations_get(self, name: str) -> ProjectLocationOperationGetCall:
        return ProjectLocationOperationGetCall(self._hub, name=name)

    def locations_operations_list(self, name: str) -> ProjectLocationOperationListCall:
        return ProjectLocationOperationListCall(self._hub, name=name)

    def locations_remove_iam_policy(
        self, request: RemoveIamPolicyRequest, resource: str
    ) -> ProjectLocationRemoveIamPolicyCall:
        """Remove IAM policy that is currently set on the given resource."""
        return ProjectLocationRemoveIamPolicyCall(self._hub, request, resource=resource)

    def locations_versions_list(self, parent: str) -> ProjectLocationVersionListCall:
        return ProjectLocationVersionListCall(self._hub, parent=parent)


# ---------------------------------------------------------------------------
# Call builders
# ---------------------------------------------------------------------------


class _NameCall(CallBuilder):
    PATH_PARAMS = (("{+name}", "name"),)
    PARAMS: tuple[str, ...] = ("name",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def name(self, new_value: str):
        return self._set("name", new_value)


class _ParentCall(CallBuilder):
    PATH_PARAMS = (("{+parent}", "parent"),)
    PARAMS: tuple[str, ...] = ("parent",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def parent(self, new_value: str):
        return self._set("parent", new_value)


class _ResourceCall(CallBuilder):
    PATH_PARAMS = (("{+resource}", "resource"),)
    PARAMS: tuple[str, ...] = ("resource",)
    DEFAULT_SCOPE = Scope.CLOUD_PLATFORM.value

    def resource(self, new_value: str):
        return self._set("resource", new_value)


class _PagedMixin:
    def page_size(self, new_value: int):
        """The maximum number of items to return."""
        return self._set("pageSize", new_value)  # type: ignore[attr-defined]

    def page_token(self, new_value: str):
        """The next_page_token value returned by a previous list request, if any."""
        return self._set("pageToken", new_value)  # type: ignore[attr-defined]


class _GetIamPolicyCall(_ResourceCall):
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+resource}:getIamPolicy"
    PARAMS = ("resource", "options.requestedPolicyVersion")
    RESPONSE = Policy

    def options_requested_policy_version(self, new_value: int):
        """The maximum policy version used to format the policy; 0, 1 or 3."""
        return self._set("options.requestedPolicyVersion", new_value)


class ProjectLocationGetCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.get"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+name}"
    RESPONSE = Location


class ProjectLocationListCall(_PagedMixin, _NameCall):
    METHOD_ID = "datafusion.projects.locations.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+name}/locations"
    PARAMS = ("name", "filter", "pageSize", "pageToken")
    RESPONSE = ListLocationsResponse

    def filter(self, new_value: str) -> ProjectLocationListCall:
        return self._set("filter", new_value)


class ProjectLocationInstanceCreateCall(_ParentCall):
    METHOD_ID = "datafusion.projects.locations.instances.create"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+parent}/instances"
    PARAMS = ("parent", "instanceId")
    RESPONSE = Operation

    def instance_id(self, new_value: str) -> ProjectLocationInstanceCreateCall:
        """Required. The name of the instance to create."""
        return self._set("instanceId", new_value)


class ProjectLocationInstanceDeleteCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.delete"
    HTTP_METHOD = "DELETE"
    PATH = "v1beta1/{+name}"
    RESPONSE = Operation


class ProjectLocationInstanceDnsPeeringCreateCall(_ParentCall):
    METHOD_ID = "datafusion.projects.locations.instances.dnsPeerings.create"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+parent}/dnsPeerings"
    PARAMS = ("parent", "dnsPeeringId")
    RESPONSE = DnsPeering

    def dns_peering_id(self, new_value: str) -> ProjectLocationInstanceDnsPeeringCreateCall:
        """Required. The name of the peering to create."""
        return self._set("dnsPeeringId", new_value)


class ProjectLocationInstanceDnsPeeringDeleteCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.dnsPeerings.delete"
    HTTP_METHOD = "DELETE"
    PATH = "v1beta1/{+name}"
    RESPONSE = Empty


class ProjectLocationInstanceDnsPeeringListCall(_PagedMixin, _ParentCall):
    METHOD_ID = "datafusion.projects.locations.instances.dnsPeerings.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+parent}/dnsPeerings"
    PARAMS = ("parent", "pageSize", "pageToken")
    RESPONSE = ListDnsPeeringsResponse


class ProjectLocationInstanceGetCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.get"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+name}"
    RESPONSE = Instance


class ProjectLocationInstanceGetIamPolicyCall(_GetIamPolicyCall):
    METHOD_ID = "datafusion.projects.locations.instances.getIamPolicy"


class ProjectLocationInstanceListCall(_PagedMixin, _ParentCall):
    METHOD_ID = "datafusion.projects.locations.instances.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+parent}/instances"
    PARAMS = ("parent", "filter", "orderBy", "pageSize", "pageToken")
    RESPONSE = ListInstancesResponse

    def filter(self, new_value: str) -> ProjectLocationInstanceListCall:
        return self._set("filter", new_value)

    def order_by(self, new_value: str) -> ProjectLocationInstanceListCall:
        """Sort results. Supported values are ``name``, ``name desc``, or ``""``."""
        return self._set("orderBy", new_value)


class ProjectLocationInstanceNamespaceGetIamPolicyCall(_GetIamPolicyCall):
    METHOD_ID = "datafusion.projects.locations.instances.namespaces.getIamPolicy"


class ProjectLocationInstanceNamespaceListCall(_PagedMixin, _ParentCall):
    METHOD_ID = "datafusion.projects.locations.instances.namespaces.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+parent}/namespaces"
    PARAMS = ("parent", "pageSize", "pageToken", "view")
    RESPONSE = ListNamespacesResponse

    def view(self, new_value: str) -> ProjectLocationInstanceNamespaceListCall:
        """``NAMESPACE_VIEW_BASIC`` or ``NAMESPACE_VIEW_FULL`` (includes IAM policies)."""
        return self._set("view", new_value)


class ProjectLocationInstanceNamespaceSetIamPolicyCall(_ResourceCall):
    METHOD_ID = "datafusion.projects.locations.instances.namespaces.setIamPolicy"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+resource}:setIamPolicy"
    RESPONSE = Policy


class ProjectLocationInstanceNamespaceTestIamPermissionCall(_ResourceCall):
    METHOD_ID = "datafusion.projects.locations.instances.namespaces.testIamPermissions"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+resource}:testIamPermissions"
    RESPONSE = TestIamPermissionsResponse


class ProjectLocationInstancePatchCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.patch"
    HTTP_METHOD = "PATCH"
    PATH = "v1beta1/{+name}"
    PARAMS = ("name", "updateMask")
    RESPONSE = Operation

    def update_mask(self, new_value: FieldMask) -> ProjectLocationInstancePatchCall:
        """Fields to overwrite; labels, options and version when unset."""
        return self._set("updateMask", new_value)


class ProjectLocationInstanceRestartCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.restart"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+name}:restart"
    RESPONSE = Operation


class ProjectLocationInstanceSetIamPolicyCall(_ResourceCall):
    METHOD_ID = "datafusion.projects.locations.instances.setIamPolicy"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+resource}:setIamPolicy"
    RESPONSE = Policy


class ProjectLocationInstanceTestIamPermissionCall(_ResourceCall):
    METHOD_ID = "datafusion.projects.locations.instances.testIamPermissions"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+resource}:testIamPermissions"
    RESPONSE = TestIamPermissionsResponse


class ProjectLocationInstanceUpgradeCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.instances.upgrade"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+name}:upgrade"
    RESPONSE = Operation


class ProjectLocationOperationCancelCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.operations.cancel"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+name}:cancel"
    RESPONSE = Empty


class ProjectLocationOperationDeleteCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.operations.delete"
    HTTP_METHOD = "DELETE"
    PATH = "v1beta1/{+name}"
    RESPONSE = Empty


class ProjectLocationOperationGetCall(_NameCall):
    METHOD_ID = "datafusion.projects.locations.operations.get"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+name}"
    RESPONSE = Operation


class ProjectLocationOperationListCall(_PagedMixin, _NameCall):
    METHOD_ID = "datafusion.projects.locations.operations.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+name}/operations"
    PARAMS = ("name", "filter", "pageSize", "pageToken")
    RESPONSE = ListOperationsResponse

    def filter(self, new_value: str) -> ProjectLocationOperationListCall:
        return self._set("filter", new_value)


class ProjectLocationRemoveIamPolicyCall(_ResourceCall):
    METHOD_ID = "datafusion.projects.locations.removeIamPolicy"
    HTTP_METHOD = "POST"
    PATH = "v1beta1/{+resource}:removeIamPolicy"
    RESPONSE = RemoveIamPolicyResponse


class ProjectLocationVersionListCall(_PagedMixin, _ParentCall):
    METHOD_ID = "datafusion.projects.locations.versions.list"
    HTTP_METHOD = "GET"
    PATH = "v1beta1/{+parent}/versions"
    PARAMS = ("parent", "latestPatchOnly", "pageSize", "pageToken")
    RESPONSE = ListAvailableVersionsResponse

    def latest_patch_only(self, new_value: bool) -> ProjectLocationVersionListCall:
        """Whether to return only the latest patch of each ``major.minor`` version."""
        return self._set("latestPatchOnly", new_value)
