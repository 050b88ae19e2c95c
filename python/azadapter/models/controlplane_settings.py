# azadapter/models/controlplane_settings.py

from pydantic_settings import BaseSettings


class ControlPlaneSettings(BaseSettings):
    """
    Pydantic settings for the control-plane ensurer.
    By default, these fields map to environment variables prefixed with `AZURE_CONTROLPLANE_`.
    For example, `AZURE_CONTROLPLANE_CLOUD_CONFIG_PATH`.
    """

    cloud_config_path: str = "/etc/kubernetes/cloudprovider/cloudprovider.conf"
    cloud_config_mount_path: str = "/etc/kubernetes/cloudprovider"
    kubelet_cloud_config_path: str = "/var/lib/kubelet/cloudprovider.conf"
    cloud_provider_config_name: str = "cloud-provider-config"
    kubelet_cloud_provider_config_name: str = "cloud-provider-kubelet-config"
    cloud_provider_config_map_key: str = "cloudprovider.conf"

    class Config:
        env_prefix = "AZURE_CONTROLPLANE_"
