"""Tests for the Cloud Data Fusion v1beta1 API surface and command-line tool."""

from __future__ import annotations

import json

import httpx
import pytest

from apiary.apis.datafusion1_beta1 import api
from apiary.apis.datafusion1_beta1.api import DataFusion, Scope
from apiary.apis.datafusion1_beta1.cli import CLI, COMMANDS
from apiary.cli.app import build_app
from apiary.cli.engine import Engine, Invocation
from apiary.common.field_mask import FieldMask

ROOT = "https://datafusion.googleapis.com/v1beta1/"
LOCATION = "projects/p/locations/us-west1"
INSTANCE = f"{LOCATION}/instances/i"


@pytest.fixture()
def hub(make_hub) -> DataFusion:
    return make_hub(DataFusion)


def _query(request: httpx.Request) -> list[tuple[str, str]]:
    return list(request.url.params.multi_items())


class TestInstances:
    def test_create_with_instance_id(self, hub, recorder, token) -> None:
        recorder.reply(httpx.Response(200, json={"name": f"{LOCATION}/operations/op", "done": False}))
        instance = api.Instance(type_="BASIC", labels={"env": "prod"}, enable_rbac=True)
        _, operation = (
            hub.projects().locations_instances_create(instance, LOCATION).instance_id("i").doit()
        )
        assert recorder.last.method == "POST"
        assert str(recorder.last.url) == f"{ROOT}{LOCATION}/instances?instanceId=i&alt=json"
        assert recorder.body() == {"enableRbac": True, "labels": {"env": "prod"}, "type": "BASIC"}
        assert operation.done is False
        assert token.calls == [[Scope.CLOUD_PLATFORM.value]]

    def test_list_parameters(self, hub, recorder) -> None:
        (
            hub.projects()
            .locations_instances_list(LOCATION)
            .page_size(5)
            .order_by("name")
            .filter("state=RUNNING")
            .doit()
        )
        assert _query(recorder.last) == [
            ("filter", "state=RUNNING"),
            ("orderBy", "name"),
            ("pageSize", "5"),
            ("alt", "json"),
        ]

    def test_patch(self, hub, recorder) -> None:
        hub.projects().locations_instances_patch(
            api.Instance(description="d"), INSTANCE
        ).update_mask(FieldMask(["description"])).doit()
        assert recorder.last.method == "PATCH"
        assert _query(recorder.last) == [("updateMask", "description"), ("alt", "json")]

    @pytest.mark.parametrize(
        "method,request_type,suffix",
        [
            ("locations_instances_restart", api.RestartInstanceRequest, ":restart"),
            ("locations_instances_upgrade", api.UpgradeInstanceRequest, ":upgrade"),
        ],
    )
    def test_lifecycle_operations(self, hub, recorder, method, request_type, suffix) -> None:
        getattr(hub.projects(), method)(request_type(), INSTANCE).doit()
        assert recorder.last.method == "POST"
        assert str(recorder.last.url) == f"{ROOT}{INSTANCE}{suffix}?alt=json"
        assert recorder.body() == {}

    def test_delete_sends_no_body(self, hub, recorder) -> None:
        hub.projects().locations_instances_delete(INSTANCE).doit()
        assert recorder.last.method == "DELETE"
        assert recorder.last.headers["content-length"] == "0"


class TestIamPolicy:
    def test_get_iam_policy_is_get_with_dotted_parameter(self, hub, recorder) -> None:
        recorder.reply(httpx.Response(200, json={"version": 3, "etag": "BwU="}))
        _, policy = (
            hub.projects()
            .locations_instances_get_iam_policy(INSTANCE)
            .options_requested_policy_version(3)
            .doit()
        )
        assert recorder.last.method == "GET"
        assert recorder.last.url.path == f"/v1beta1/{INSTANCE}:getIamPolicy"
        assert _query(recorder.last) == [("options.requestedPolicyVersion", "3"), ("alt", "json")]
        assert policy.version == 3
        assert policy.etag == b"\x07\x05"

    def test_namespace_set_iam_policy(self, hub, recorder) -> None:
        resource = f"{INSTANCE}/namespaces/default"
        request = api.SetIamPolicyRequest(
            policy=api.Policy(
                bindings=[api.Binding(role="roles/viewer", members=["user:a@example.com"])]
            ),
            update_mask=FieldMask(["bindings"]),
        )
        hub.projects().locations_instances_namespaces_set_iam_policy(request, resource).doit()
        assert str(recorder.last.url) == f"{ROOT}{resource}:setIamPolicy?alt=json"
        assert recorder.body() == {
            "policy": {"bindings": [{"members": ["user:a@example.com"], "role": "roles/viewer"}]},
            "updateMask": "bindings",
        }

    def test_remove_iam_policy(self, hub, recorder) -> None:
        hub.projects().locations_remove_iam_policy(api.RemoveIamPolicyRequest(), INSTANCE).doit()
        assert str(recorder.last.url) == f"{ROOT}{INSTANCE}:removeIamPolicy?alt=json"


class TestOtherCollections:
    def test_versions_boolean_parameter(self, hub, recorder) -> None:
        hub.projects().locations_versions_list(LOCATION).latest_patch_only(True).doit()
        assert _query(recorder.last) == [("latestPatchOnly", "true"), ("alt", "json")]

    def test_dns_peering_create(self, hub, recorder) -> None:
        peering = api.DnsPeering(domain="example.com", target_project="tp")
        hub.projects().locations_instances_dns_peerings_create(peering, INSTANCE).dns_peering_id(
            "peer"
        ).doit()
        assert str(recorder.last.url) == f"{ROOT}{INSTANCE}/dnsPeerings?dnsPeeringId=peer&alt=json"
        assert recorder.body() == {"domain": "example.com", "targetProject": "tp"}

    def test_operations(self, hub, recorder) -> None:
        op = f"{LOCATION}/operations/o"
        hub.projects().locations_operations_cancel(api.CancelOperationRequest(), op).doit()
        assert str(recorder.last.url) == f"{ROOT}{op}:cancel?alt=json"
        hub.projects().locations_operations_list(LOCATION).filter("done=true").doit()
        assert str(recorder.last.url).startswith(f"{ROOT}{LOCATION}/operations?")

    def test_namespaces_list_view(self, hub, recorder) -> None:
        hub.projects().locations_instances_namespaces_list(INSTANCE).view("NAMESPACE_VIEW_FULL").doit()
        assert _query(recorder.last) == [("view", "NAMESPACE_VIEW_FULL"), ("alt", "json")]


class TestCommandLine:
    def test_create_instance_from_fields(self, hub, recorder, capsys) -> None:
        recorder.reply(httpx.Response(200, json={"name": f"{LOCATION}/operations/op"}))
        Engine(
            hub,
            COMMANDS,
            Invocation(
                "projects",
                "locations-instances-create",
                args=(LOCATION,),
                kv=(
                    "type=ENTERPRISE",
                    "labels=env=prod",
                    "labels=team=data",
                    "enable-rbac=true",
                    "network-config.network=default",
                    "p4-service-account=sa@p.iam.gserviceaccount.com",
                ),
                params=("instance-id=i",),
            ),
        ).doit()
        assert recorder.last.url.params["instanceId"] == "i"
        assert recorder.body() == {
            "enableRbac": True,
            "labels": {"env": "prod", "team": "data"},
            "networkConfig": {"network": "default"},
            "p4ServiceAccount": "sa@p.iam.gserviceaccount.com",
            "type": "ENTERPRISE",
        }
        assert json.loads(capsys.readouterr().out) == {"name": f"{LOCATION}/operations/op"}

    def test_get_iam_policy_command(self, cli_runner, recorder, monkeypatch) -> None:
        monkeypatch.setenv("APIARY_ACCESS_TOKEN", "t")
        app = build_app(CLI, client_factory=recorder.client)
        result = cli_runner.invoke(
            app,
            [
                "projects", "locations-instances-get-iam-policy", INSTANCE,
                "-p", "options-requested-policy-version=3",
            ],
        )
        assert result.exit_code == 0, result.output
        assert recorder.last.method == "GET"
        assert recorder.last.url.params["options.requestedPolicyVersion"] == "3"
