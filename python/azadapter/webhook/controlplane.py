"""
azadapter/webhook/controlplane.py

Mutates the generated control-plane manifests so they meet Azure's requirements:

    - kube-apiserver and kube-controller-manager deployments get the cloud
      provider flags, the cloud-provider-config volume and its checksum
      annotation, and the host's /etc/ssl from Kubernetes 1.17 on.
    - The kubelet service unit gets the cloud provider flags.
    - The kubelet configuration loses the CSI related feature gates.

Manifests are plain mappings as decoded from YAML/JSON and are edited in place.
No API server is contacted: config maps the ensurer depends on are passed in.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from azadapter.models.controlplane_settings import ControlPlaneSettings
from azadapter.models.k8s import (
    UnitOption,
    deserialize_command_line,
    serialize_command_line,
    unit_option_with_section_and_name,
)
from azadapter.webhook.manifest import (
    compute_checksum,
    container_with_name,
    ensure_annotation_or_label,
    ensure_no_string_with_prefix_contains,
    ensure_string_with_prefix,
    ensure_string_with_prefix_contains,
    ensure_volume_mount_with_name,
    ensure_volume_with_name,
)

logger = logging.getLogger(__name__)

LABEL_NETWORK_POLICY_TO_PUBLIC_NETWORKS = "networking.gardener.cloud/to-public-networks"
LABEL_NETWORK_POLICY_TO_PRIVATE_NETWORKS = "networking.gardener.cloud/to-private-networks"
LABEL_NETWORK_POLICY_TO_BLOCKED_CIDRS = "networking.gardener.cloud/to-blocked-cidrs"
LABEL_NETWORK_POLICY_ALLOWED = "allowed"

CSI_FEATURE_GATES = ["VolumeSnapshotDataSource", "CSINodeInfo", "CSIDriverRegistry"]

ETC_SSL_NAME = "etc-ssl"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.\d+)?(-\S+)?")


def must_mount_etc_ssl_folder(version: str) -> bool:
    """
    True if `version` is at least 1.17.

    Unparseable versions and prereleases (e.g. 1.17.0-rc.1) count as older.
    """
    match = _VERSION_RE.match(version.strip())
    if match is None or match.group(3):
        return False
    return (int(match.group(1)), int(match.group(2))) >= (1, 17)


class ControlPlaneEnsurer:
    """Applies the Azure specific changes to control-plane and kubelet manifests."""

    def __init__(self, settings: Optional[ControlPlaneSettings] = None) -> None:
        self.settings = settings or ControlPlaneSettings()

    # ------------------------------------------------------------------
    # Deployments
    # ------------------------------------------------------------------

    def ensure_kube_apiserver_deployment(
        self,
        deployment: Dict[str, Any],
        kubernetes_version: str,
        cloud_provider_config_data: Mapping[str, str],
    ) -> None:
        """
        Ensure the kube-apiserver deployment conforms to the provider requirements.

        Args:
            deployment: The Deployment manifest, edited in place.
            kubernetes_version: Kubernetes version of the cluster.
            cloud_provider_config_data: Data of the cloud-provider-config map,
                used for the checksum annotation.
        """
        template = deployment["spec"]["template"]
        pod_spec = template["spec"]

        container = container_with_name(pod_spec.get("containers", []), "kube-apiserver")
        if container is not None:
            self._ensure_kube_apiserver_command_line_args(container)
            self._ensure_volume_mounts(container, kubernetes_version)
        self._ensure_volumes(pod_spec, kubernetes_version)
        self._ensure_checksum_annotation(template, cloud_provider_config_data)

    def ensure_kube_controller_manager_deployment(
        self,
        deployment: Dict[str, Any],
        kubernetes_version: str,
        cloud_provider_config_data: Mapping[str, str],
    ) -> None:
        """
        Ensure the kube-controller-manager deployment conforms to the provider requirements.

        Same arguments as ensure_kube_apiserver_deployment.
        """
        template = deployment["spec"]["template"]
        pod_spec = template["spec"]

        container = container_with_name(
            pod_spec.get("containers", []), "kube-controller-manager"
        )
        if container is not None:
            self._ensure_kube_controller_manager_command_line_args(container)
            self._ensure_volume_mounts(container, kubernetes_version)
        self._ensure_kube_controller_manager_labels(template)
        self._ensure_volumes(pod_spec, kubernetes_version)
        self._ensure_checksum_annotation(template, cloud_provider_config_data)

    def _ensure_kube_apiserver_command_line_args(self, container: Dict[str, Any]) -> None:
        command = container.get("command", [])
        command = ensure_string_with_prefix(command, "--cloud-provider=", "azure")
        command = ensure_string_with_prefix(
            command, "--cloud-config=", self.settings.cloud_config_path
        )
        command = ensure_string_with_prefix_contains(
            command, "--enable-admission-plugins=", "PersistentVolumeLabel", ","
        )
        command = ensure_no_string_with_prefix_contains(
            command, "--disable-admission-plugins=", "PersistentVolumeLabel", ","
        )
        container["command"] = command

    def _ensure_kube_controller_manager_command_line_args(
        self, container: Dict[str, Any]
    ) -> None:
        command = container.get("command", [])
        command = ensure_string_with_prefix(command, "--cloud-provider=", "external")
        command = ensure_string_with_prefix(
            command, "--cloud-config=", self.settings.cloud_config_path
        )
        command = ensure_string_with_prefix(
            command, "--external-cloud-volume-plugin=", "azure"
        )
        container["command"] = command

    def _ensure_kube_controller_manager_labels(self, template: Dict[str, Any]) -> None:
        metadata = template.setdefault("metadata", {})
        labels = metadata.get("labels")
        for key in (
            LABEL_NETWORK_POLICY_TO_PUBLIC_NETWORKS,
            LABEL_NETWORK_POLICY_TO_PRIVATE_NETWORKS,
            LABEL_NETWORK_POLICY_TO_BLOCKED_CIDRS,
        ):
            labels = ensure_annotation_or_label(labels, key, LABEL_NETWORK_POLICY_ALLOWED)
        metadata["labels"] = labels

    def _cloud_provider_config_volume_mount(self) -> Dict[str, Any]:
        return {
            "name": self.settings.cloud_provider_config_name,
            "mountPath": self.settings.cloud_config_mount_path,
        }

    def _cloud_provider_config_volume(self) -> Dict[str, Any]:
        return {
            "name": self.settings.cloud_provider_config_name,
            "configMap": {"name": self.settings.cloud_provider_config_name},
        }

    def _ensure_volume_mounts(self, container: Dict[str, Any], version: str) -> None:
        mounts = ensure_volume_mount_with_name(
            container.get("volumeMounts", []), self._cloud_provider_config_volume_mount()
        )
        if must_mount_etc_ssl_folder(version):
            mounts = ensure_volume_mount_with_name(
                mounts, {"name": ETC_SSL_NAME, "mountPath": "/etc/ssl", "readOnly": True}
            )
        container["volumeMounts"] = mounts

    def _ensure_volumes(self, pod_spec: Dict[str, Any], version: str) -> None:
        volumes = ensure_volume_with_name(
            pod_spec.get("volumes", []), self._cloud_provider_config_volume()
        )
        if must_mount_etc_ssl_folder(version):
            volumes = ensure_volume_with_name(
                volumes, {"name": ETC_SSL_NAME, "hostPath": {"path": "/etc/ssl"}}
            )
        pod_spec["volumes"] = volumes

    def _ensure_checksum_annotation(
        self, template: Dict[str, Any], config_map_data: Mapping[str, str]
    ) -> None:
        metadata = template.setdefault("metadata", {})
        metadata["annotations"] = ensure_annotation_or_label(
            metadata.get("annotations"),
            f"checksum/configmap-{self.settings.cloud_provider_config_name}",
            compute_checksum(config_map_data),
        )

    # ------------------------------------------------------------------
    # Kubelet
    # ------------------------------------------------------------------

    def ensure_kubelet_service_unit_options(
        self, options: List[UnitOption]
    ) -> List[UnitOption]:
        """Ensure the kubelet.service ExecStart carries the cloud provider flags."""
        opt = unit_option_with_section_and_name(options, "Service", "ExecStart")
        if opt is not None:
            command = deserialize_command_line(opt.value)
            command = ensure_string_with_prefix(command, "--cloud-provider=", "azure")
            command = ensure_string_with_prefix(
                command, "--cloud-config=", self.settings.kubelet_cloud_config_path
            )
            opt.value = serialize_command_line(command, 1, " \\\n    ")
        return options

    def ensure_kubelet_configuration(self, kubelet_config: Dict[str, Any]) -> None:
        """Make sure CSI related feature gates are not enabled."""
        feature_gates = kubelet_config.get("featureGates")
        if not feature_gates:
            return
        for gate in CSI_FEATURE_GATES:
            feature_gates.pop(gate, None)

    def should_provision_kubelet_cloud_provider_config(self) -> bool:
        return True

    def ensure_kubelet_cloud_provider_config(
        self, config_map: Optional[Mapping[str, Any]], namespace: str
    ) -> Optional[str]:
        """
        Return the kubelet cloud provider config from its config map.

        Args:
            config_map: The kubelet cloud-provider config map, or None if it does not exist.
            namespace: Namespace the config map was looked up in, for logging.

        Returns:
            The config file content, or None to leave the existing content untouched.
        """
        if config_map is None:
            logger.info(
                "configmap %s/%s not found",
                namespace,
                self.settings.kubelet_cloud_provider_config_name,
            )
            return None

        data = config_map.get("data") or {}
        value = data.get(self.settings.cloud_provider_config_map_key)
        return value or None


__all__ = ["ControlPlaneEnsurer", "must_mount_etc_ssl_folder"]
