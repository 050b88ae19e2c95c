"""Unit tests for the control-plane ensurer."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict

import pytest

from azadapter.models.controlplane_settings import ControlPlaneSettings
from azadapter.models.k8s import UnitOption, deserialize_command_line
from azadapter.webhook.controlplane import ControlPlaneEnsurer, must_mount_etc_ssl_folder
from azadapter.webhook.manifest import compute_checksum

CLOUD_PROVIDER_CONFIG_DATA = {"cloudprovider.conf": "tenantId: tenant_id\n"}
CHECKSUM_ANNOTATION = "checksum/configmap-cloud-provider-config"


def _deployment(container_name: str, command: list[str]) -> Dict[str, Any]:
    return {
        "metadata": {"name": container_name, "namespace": "shoot--foo--bar"},
        "spec": {
            "template": {
                "metadata": {"labels": {"app": "kubernetes"}},
                "spec": {
                    "containers": [{"name": container_name, "command": command}],
                },
            }
        },
    }


@pytest.fixture
def ensurer() -> ControlPlaneEnsurer:
    return ControlPlaneEnsurer(ControlPlaneSettings())


def test_kube_apiserver_deployment(ensurer: ControlPlaneEnsurer) -> None:
    dep = _deployment(
        "kube-apiserver",
        [
            "/hyperkube",
            "apiserver",
            "--cloud-provider=?",
            "--enable-admission-plugins=Priority,NamespaceLifecycle",
            "--disable-admission-plugins=PersistentVolumeLabel,Foo",
        ],
    )

    ensurer.ensure_kube_apiserver_deployment(dep, "1.16.4", CLOUD_PROVIDER_CONFIG_DATA)

    template = dep["spec"]["template"]
    container = template["spec"]["containers"][0]
    assert container["command"] == [
        "/hyperkube",
        "apiserver",
        "--cloud-provider=azure",
        "--enable-admission-plugins=Priority,NamespaceLifecycle,PersistentVolumeLabel",
        "--disable-admission-plugins=Foo",
        "--cloud-config=/etc/kubernetes/cloudprovider/cloudprovider.conf",
    ], "kube-apiserver flags should be set for azure"
    assert container["volumeMounts"] == [
        {"name": "cloud-provider-config", "mountPath": "/etc/kubernetes/cloudprovider"}
    ], "Only the cloud provider config should be mounted before 1.17"
    assert template["spec"]["volumes"] == [
        {"name": "cloud-provider-config", "configMap": {"name": "cloud-provider-config"}}
    ]
    assert template["metadata"]["annotations"] == {
        CHECKSUM_ANNOTATION: compute_checksum(CLOUD_PROVIDER_CONFIG_DATA)
    }, "Checksum annotation should track the config map"


def test_kube_apiserver_mounts_etc_ssl_from_117(ensurer: ControlPlaneEnsurer) -> None:
    dep = _deployment("kube-apiserver", ["kube-apiserver"])

    ensurer.ensure_kube_apiserver_deployment(dep, "1.17.1", CLOUD_PROVIDER_CONFIG_DATA)

    pod_spec = dep["spec"]["template"]["spec"]
    assert {"name": "etc-ssl", "mountPath": "/etc/ssl", "readOnly": True} in pod_spec[
        "containers"
    ][0]["volumeMounts"], "/etc/ssl should be mounted read-only"
    assert {"name": "etc-ssl", "hostPath": {"path": "/etc/ssl"}} in pod_spec["volumes"]


def test_kube_apiserver_deployment_is_idempotent(ensurer: ControlPlaneEnsurer) -> None:
    dep = _deployment("kube-apiserver", ["kube-apiserver"])
    ensurer.ensure_kube_apiserver_deployment(dep, "1.18.0", CLOUD_PROVIDER_CONFIG_DATA)
    once = copy.deepcopy(dep)

    ensurer.ensure_kube_apiserver_deployment(dep, "1.18.0", CLOUD_PROVIDER_CONFIG_DATA)

    assert dep == once, "Applying the ensurer twice should not change the result"


def test_kube_controller_manager_deployment(ensurer: ControlPlaneEnsurer) -> None:
    dep = _deployment(
        "kube-controller-manager", ["kube-controller-manager", "--cloud-provider=azure"]
    )

    ensurer.ensure_kube_controller_manager_deployment(
        dep, "1.16.4", CLOUD_PROVIDER_CONFIG_DATA
    )

    template = dep["spec"]["template"]
    assert template["spec"]["containers"][0]["command"] == [
        "kube-controller-manager",
        "--cloud-provider=external",
        "--cloud-config=/etc/kubernetes/cloudprovider/cloudprovider.conf",
        "--external-cloud-volume-plugin=azure",
    ]
    assert template["metadata"]["labels"] == {
        "app": "kubernetes",
        "networking.gardener.cloud/to-public-networks": "allowed",
        "networking.gardener.cloud/to-private-networks": "allowed",
        "networking.gardener.cloud/to-blocked-cidrs": "allowed",
    }, "Network policy labels should be added"
    assert CHECKSUM_ANNOTATION in template["metadata"]["annotations"]


def test_deployment_without_matching_container_only_gets_volumes(
    ensurer: ControlPlaneEnsurer,
) -> None:
    dep = _deployment("sidecar", ["sleep", "infinity"])

    ensurer.ensure_kube_apiserver_deployment(dep, "1.16.4", CLOUD_PROVIDER_CONFIG_DATA)

    container = dep["spec"]["template"]["spec"]["containers"][0]
    assert container["command"] == ["sleep", "infinity"], "Other containers are untouched"
    assert "volumeMounts" not in container
    assert len(dep["spec"]["template"]["spec"]["volumes"]) == 1


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.16.4", False),
        ("1.17.0", True),
        ("v1.20.2", True),
        ("2.0", True),
        ("1.17.0-rc.1", False),
        ("", False),
    ],
)
def test_must_mount_etc_ssl_folder(version: str, expected: bool) -> None:
    assert must_mount_etc_ssl_folder(version) is expected


def test_kubelet_service_unit_options(ensurer: ControlPlaneEnsurer) -> None:
    options = [
        UnitOption(section="Unit", name="Description", value="kubelet"),
        UnitOption(
            section="Service",
            name="ExecStart",
            value="/opt/bin/hyperkube kubelet \\\n    --config=/var/lib/kubelet/config/kubelet",
        ),
    ]

    result = ensurer.ensure_kubelet_service_unit_options(options)

    exec_start = result[1].value
    assert deserialize_command_line(exec_start) == [
        "/opt/bin/hyperkube",
        "kubelet",
        "--config=/var/lib/kubelet/config/kubelet",
        "--cloud-provider=azure",
        "--cloud-config=/var/lib/kubelet/cloudprovider.conf",
    ], "kubelet should be started with the azure cloud provider"
    assert exec_start.startswith("/opt/bin/hyperkube \\\n    kubelet")
    assert result[0].value == "kubelet", "Other unit options are untouched"


def test_kubelet_configuration_drops_csi_feature_gates(
    ensurer: ControlPlaneEnsurer,
) -> None:
    kubelet_config: Dict[str, Any] = {
        "featureGates": {
            "VolumeSnapshotDataSource": True,
            "CSINodeInfo": True,
            "CSIDriverRegistry": True,
            "Foo": True,
        }
    }

    ensurer.ensure_kubelet_configuration(kubelet_config)

    assert kubelet_config == {"featureGates": {"Foo": True}}


@pytest.mark.parametrize("kubelet_config", [{}, {"featureGates": None}, {"featureGates": {}}])
def test_kubelet_configuration_without_feature_gates_is_untouched(
    ensurer: ControlPlaneEnsurer, kubelet_config: Dict[str, Any]
) -> None:
    expected = copy.deepcopy(kubelet_config)

    ensurer.ensure_kubelet_configuration(kubelet_config)

    assert kubelet_config == expected, "A missing feature gate map should be left alone"


def test_kubelet_cloud_provider_config(ensurer: ControlPlaneEnsurer) -> None:
    assert ensurer.should_provision_kubelet_cloud_provider_config() is True
    config_map = {
        "metadata": {"name": "cloud-provider-kubelet-config"},
        "data": {"cloudprovider.conf": "cloud: AzurePublicCloud\n"},
    }

    assert (
        ensurer.ensure_kubelet_cloud_provider_config(config_map, "shoot--foo--bar")
        == "cloud: AzurePublicCloud\n"
    )
    assert (
        ensurer.ensure_kubelet_cloud_provider_config({"data": {}}, "shoot--foo--bar")
        is None
    ), "An empty config map should leave the existing config alone"


def test_kubelet_cloud_provider_config_missing(
    ensurer: ControlPlaneEnsurer, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="azadapter.webhook.controlplane"):
        result = ensurer.ensure_kubelet_cloud_provider_config(None, "shoot--foo--bar")

    assert result is None
    assert "shoot--foo--bar/cloud-provider-kubelet-config not found" in caplog.text


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AZURE_CONTROLPLANE_KUBELET_CLOUD_CONFIG_PATH", "/etc/azure.conf")
    ensurer = ControlPlaneEnsurer()
    options = [UnitOption(section="Service", name="ExecStart", value="kubelet")]

    ensurer.ensure_kubelet_service_unit_options(options)

    assert "--cloud-config=/etc/azure.conf" in deserialize_command_line(options[0].value)
