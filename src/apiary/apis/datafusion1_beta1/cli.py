"""The ``datafusion1-beta1`` command-line tool."""

from __future__ import annotations

from apiary.apis.datafusion1_beta1 import api
from apiary.cli import ApiCli, Arg, Command, ComplexType, JsonType, JsonTypeInfo, Param, run

_STRING = JsonTypeInfo(JsonType.STRING)
_STRING_VEC = JsonTypeInfo(JsonType.STRING, ComplexType.VEC)
_STRING_MAP = JsonTypeInfo(JsonType.STRING, ComplexType.MAP)
_BOOLEAN = JsonTypeInfo(JsonType.BOOLEAN)
_INT = JsonTypeInfo(JsonType.INT)

_INSTANCE_NAME = Arg(
    "name",
    "Required. The instance resource name in the format "
    "projects/{project}/locations/{location}/instances/{instance}.",
)
_GET_IAM_RESOURCE = Arg(
    "resource", "REQUIRED: The resource for which the policy is being requested."
)
_SET_IAM_RESOURCE = Arg(
    "resource", "REQUIRED: The resource for which the policy is being specified."
)
_TEST_IAM_RESOURCE = Arg(
    "resource", "REQUIRED: The resource for which the policy detail is being requested."
)

_INSTANCE_FIELDS = {
    "api-endpoint": ("apiEndpoint", _STRING),
    "create-time": ("createTime", _STRING),
    "crypto-key-config.key-reference": ("cryptoKeyConfig.keyReference", _STRING),
    "dataplex-data-lineage-integration-enabled": (
        "dataplexDataLineageIntegrationEnabled", _BOOLEAN),
    "dataproc-service-account": ("dataprocServiceAccount", _STRING),
    "description": ("description", _STRING),
    "disabled-reason": ("disabledReason", _STRING_VEC),
    "display-name": ("displayName", _STRING),
    "enable-rbac": ("enableRbac", _BOOLEAN),
    "enable-stackdriver-logging": ("enableStackdriverLogging", _BOOLEAN),
    "enable-stackdriver-monitoring": ("enableStackdriverMonitoring", _BOOLEAN),
    "enable-zone-separation": ("enableZoneSeparation", _BOOLEAN),
    "event-publish-config.enabled": ("eventPublishConfig.enabled", _BOOLEAN),
    "event-publish-config.topic": ("eventPublishConfig.topic", _STRING),
    "gcs-bucket": ("gcsBucket", _STRING),
    "labels": ("labels", _STRING_MAP),
    "maintenance-policy.maintenance-exclusion-window.end-time": (
        "maintenancePolicy.maintenanceExclusionWindow.endTime", _STRING),
    "maintenance-policy.maintenance-exclusion-window.start-time": (
        "maintenancePolicy.maintenanceExclusionWindow.startTime", _STRING),
    "maintenance-policy.maintenance-window.recurring-time-window.recurrence": (
        "maintenancePolicy.maintenanceWindow.recurringTimeWindow.recurrence", _STRING),
    "maintenance-policy.maintenance-window.recurring-time-window.window.end-time": (
        "maintenancePolicy.maintenanceWindow.recurringTimeWindow.window.endTime", _STRING),
    "maintenance-policy.maintenance-window.recurring-time-window.window.start-time": (
        "maintenancePolicy.maintenanceWindow.recurringTimeWindow.window.startTime", _STRING),
    "name": ("name", _STRING),
    "network-config.connection-type": ("networkConfig.connectionType", _STRING),
    "network-config.ip-allocation": ("networkConfig.ipAllocation", _STRING),
    "network-config.network": ("networkConfig.network", _STRING),
    "network-config.private-service-connect-config.effective-unreachable-cidr-block": (
        "networkConfig.privateServiceConnectConfig.effectiveUnreachableCidrBlock", _STRING),
    "network-config.private-service-connect-config.network-attachment": (
        "networkConfig.privateServiceConnectConfig.networkAttachment", _STRING),
    "network-config.private-service-connect-config.unreachable-cidr-block": (
        "networkConfig.privateServiceConnectConfig.unreachableCidrBlock", _STRING),
    "options": ("options", _STRING_MAP),
    "p4-service-account": ("p4ServiceAccount", _STRING),
    "patch-revision": ("patchRevision", _STRING),
    "private-instance": ("privateInstance", _BOOLEAN),
    "satisfies-pzs": ("satisfiesPzs", _BOOLEAN),
    "service-account": ("serviceAccount", _STRING),
    "service-endpoint": ("serviceEndpoint", _STRING),
    "state": ("state", _STRING),
    "state-message": ("stateMessage", _STRING),
    "tenant-project-id": ("tenantProjectId", _STRING),
    "type": ("type", _STRING),
    "update-time": ("updateTime", _STRING),
    "version": ("version", _STRING),
    "workforce-identity-service-endpoint": ("workforceIdentityServiceEndpoint", _STRING),
    "zone": ("zone", _STRING),
}

_DNS_PEERING_FIELDS = {
    "description": ("description", _STRING),
    "domain": ("domain", _STRING),
    "name": ("name", _STRING),
    "target-network": ("targetNetwork", _STRING),
    "target-project": ("targetProject", _STRING),
}

_SET_IAM_POLICY_FIELDS = {
    "policy.etag": ("policy.etag", _STRING),
    "policy.version": ("policy.version", _INT),
    "update-mask": ("updateMask", _STRING),
}

_TEST_IAM_PERMISSIONS_FIELDS = {
    "permissions": ("permissions", _STRING_VEC),
}

_PAGING_PARAMS = {
    "page-size": Param("page_size", "int32"),
    "page-token": Param("page_token"),
}

_GET_IAM_POLICY_PARAMS = {
    "options-requested-policy-version": Param("options_requested_policy_version", "int32"),
}

COMMANDS = (
    Command(
        "projects", "locations-get", "locations_get",
        about="Gets information about a location.",
        args=(Arg("name", "Resource name for the location."),),
    ),
    Command(
        "projects", "locations-instances-create", "locations_instances_create",
        about="Creates a new Data Fusion instance in the specified project and location.",
        args=(Arg(
            "parent",
            "Required. The instance's project and location in the format "
            "projects/{project}/locations/{location}.",
        ),),
        request=api.Instance,
        fields=_INSTANCE_FIELDS,
        params={"instance-id": Param("instance_id")},
    ),
    Command(
        "projects", "locations-instances-delete", "locations_instances_delete",
        about="Deletes a single Data Fusion instance.",
        args=(_INSTANCE_NAME,),
    ),
    Command(
        "projects", "locations-instances-dns-peerings-create",
        "locations_instances_dns_peerings_create",
        about="Creates DNS peering on the given resource.",
        args=(Arg("parent", "Required. The resource on which DNS peering will be created."),),
        request=api.DnsPeering,
        fields=_DNS_PEERING_FIELDS,
        params={"dns-peering-id": Param("dns_peering_id")},
    ),
    Command(
        "projects", "locations-instances-dns-peerings-delete",
        "locations_instances_dns_peerings_delete",
        about="Deletes DNS peering on the given resource.",
        args=(Arg("name", "Required. The name of the DNS peering zone to delete."),),
    ),
    Command(
        "projects", "locations-instances-dns-peerings-list",
        "locations_instances_dns_peerings_list",
        about="Lists DNS peerings for a given resource.",
        args=(Arg("parent", "Required. The parent, which owns this collection of dns peerings."),),
        params=_PAGING_PARAMS,
    ),
    Command(
        "projects", "locations-instances-get", "locations_instances_get",
        about="Gets details of a single Data Fusion instance.",
        args=(_INSTANCE_NAME,),
    ),
    Command(
        "projects", "locations-instances-get-iam-policy", "locations_instances_get_iam_policy",
        about=(
            "Gets the access control policy for a resource. Returns an empty policy "
            "if the resource exists and does not have a policy set."
        ),
        args=(_GET_IAM_RESOURCE,),
        params=_GET_IAM_POLICY_PARAMS,
    ),
    Command(
        "projects", "locations-instances-list", "locations_instances_list",
        about="Lists Data Fusion instances in the specified project and location.",
        args=(Arg(
            "parent",
            "Required. The project and location for which to retrieve instance "
            "information in the format projects/{project}/locations/{location}.",
        ),),
        params={
            "filter": Param("filter"),
            "order-by": Param("order_by"),
            **_PAGING_PARAMS,
        },
    ),
    Command(
        "projects", "locations-instances-namespaces-get-iam-policy",
        "locations_instances_namespaces_get_iam_policy",
        about="Gets the access control policy for a resource.",
        args=(_GET_IAM_RESOURCE,),
        params=_GET_IAM_POLICY_PARAMS,
    ),
    Command(
        "projects", "locations-instances-namespaces-list", "locations_instances_namespaces_list",
        about="List namespaces in a given instance",
        args=(Arg("parent", "Required. The instance to list its namespaces."),),
        params={**_PAGING_PARAMS, "view": Param("view")},
    ),
    Command(
        "projects", "locations-instances-namespaces-set-iam-policy",
        "locations_instances_namespaces_set_iam_policy",
        about="Sets the access control policy on the specified resource.",
        args=(_SET_IAM_RESOURCE,),
        request=api.SetIamPolicyRequest,
        fields=_SET_IAM_POLICY_FIELDS,
    ),
    Command(
        "projects", "locations-instances-namespaces-test-iam-permissions",
        "locations_instances_namespaces_test_iam_permissions",
        about="Returns permissions that a caller has on the specified resource.",
        args=(_TEST_IAM_RESOURCE,),
        request=api.TestIamPermissionsRequest,
        fields=_TEST_IAM_PERMISSIONS_FIELDS,
    ),
    Command(
        "projects", "locations-instances-patch", "locations_instances_patch",
        about="Updates a single Data Fusion instance.",
        args=(Arg(
            "name",
            "Output only. The name of this instance is in the form of "
            "projects/{project}/locations/{location}/instances/{instance}.",
        ),),
        request=api.Instance,
        fields=_INSTANCE_FIELDS,
        params={"update-mask": Param("update_mask", "google-fieldmask")},
    ),
    Command(
        "projects", "locations-instances-restart", "locations_instances_restart",
        about=(
            "Restart a single Data Fusion instance. At the end of an operation "
            "instance is fully restarted."
        ),
        args=(Arg("name", "Required. Name of the Data Fusion instance which need to be restarted."),),
        request=api.RestartInstanceRequest,
    ),
    Command(
        "projects", "locations-instances-set-iam-policy", "locations_instances_set_iam_policy",
        about="Sets the access control policy on the specified resource.",
        args=(_SET_IAM_RESOURCE,),
        request=api.SetIamPolicyRequest,
        fields=_SET_IAM_POLICY_FIELDS,
    ),
    Command(
        "projects", "locations-instances-test-iam-permissions",
        "locations_instances_test_iam_permissions",
        about="Returns permissions that a caller has on the specified resource.",
        args=(_TEST_IAM_RESOURCE,),
        request=api.TestIamPermissionsRequest,
        fields=_TEST_IAM_PERMISSIONS_FIELDS,
    ),
    Command(
        "projects", "locations-instances-upgrade", "locations_instances_upgrade",
        about=(
            "Upgrade a single Data Fusion instance. At the end of an operation "
            "instance is fully upgraded."
        ),
        args=(Arg("name", "Required. Name of the Data Fusion instance which need to be upgraded."),),
        request=api.UpgradeInstanceRequest,
    ),
    Command(
        "projects", "locations-list", "locations_list",
        about="Lists information about the supported locations for this service.",
        args=(Arg("name", "The resource that owns the locations collection, if applicable."),),
        params={"filter": Param("filter"), **_PAGING_PARAMS},
    ),
    Command(
        "projects", "locations-operations-cancel", "locations_operations_cancel",
        about="Starts asynchronous cancellation on a long-running operation.",
        args=(Arg("name", "The name of the operation resource to be cancelled."),),
        request=api.CancelOperationRequest,
    ),
    Command(
        "projects", "locations-operations-delete", "locations_operations_delete",
        about="Deletes a long-running operation.",
        args=(Arg("name", "The name of the operation resource to be deleted."),),
    ),
    Command(
        "projects", "locations-operations-get", "locations_operations_get",
        about="Gets the latest state of a long-running operation.",
        args=(Arg("name", "The name of the operation resource."),),
    ),
    Command(
        "projects", "locations-operations-list", "locations_operations_list",
        about="Lists operations that match the specified filter in the request.",
        args=(Arg("name", "The name of the operation's parent resource."),),
        params={"filter": Param("filter"), **_PAGING_PARAMS},
    ),
    Command(
        "projects", "locations-remove-iam-policy", "locations_remove_iam_policy",
        about="Remove IAM policy that is currently set on the given resource.",
        args=(Arg("resource", "Required. The resource on which IAM policy to be removed is attached to."),),
        request=api.RemoveIamPolicyRequest,
    ),
    Command(
        "projects", "locations-versions-list", "locations_versions_list",
        about="Lists possible versions for Data Fusion instances in the specified project and location.",
        args=(Arg(
            "parent",
            "Required. The project and location for which to retrieve instance "
            "information in the format projects/{project}/locations/{location}.",
        ),),
        params={"latest-patch-only": Param("latest_patch_only", "boolean"), **_PAGING_PARAMS},
    ),
)

CLI = ApiCli(
    name="datafusion1-beta1",
    version="6.0.0+20240618",
    about=(
        "Cloud Data Fusion is a fully-managed, cloud native, enterprise data "
        "integration service for quickly building and managing data pipelines."
    ),
    hub=api.DataFusion,
    commands=COMMANDS,
    groups={"projects": "Methods on the *project* resources."},
)


def main() -> None:
    run(CLI)


if __name__ == "__main__":
    main()
