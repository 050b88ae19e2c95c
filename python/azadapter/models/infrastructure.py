"""
azadapter/models/infrastructure.py

Defines the Pydantic models describing the desired Azure infrastructure:
 - VNet: descriptor of the virtual network, either to be created or reused.
 - NetworkConfig: virtual network plus worker subnet settings.
 - InfrastructureConfig: provider-specific configuration of a cluster.
 - InfrastructureResource: the platform resource that requests the infrastructure.

Field aliases follow the camelCase names used in the platform's provider config,
so raw documents can be loaded with `InfrastructureConfig.model_validate(raw)`.
"""

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class VNet(BaseModel):
    """Describes the virtual network of a cluster.

    Either `cidr` is set (the network is created and named after the cluster) or
    `resource_group` is set (an existing network called `name` is reused).

    Attributes:
        name: Name of an existing virtual network.
        cidr: Address range of a virtual network to create.
        resource_group: Resource group holding an existing virtual network.
    """

    name: Optional[str] = None
    cidr: Optional[str] = None
    resource_group: Optional[str] = Field(default=None, alias="resourceGroup")

    class Config:
        frozen = True
        populate_by_name = True


class NetworkConfig(BaseModel):
    """Network settings of a cluster.

    Attributes:
        vnet: The virtual network descriptor.
        workers: CIDR of the worker subnet.
        service_endpoints: Azure service endpoints enabled on the worker subnet.
    """

    vnet: VNet
    workers: str
    service_endpoints: List[str] = Field(default_factory=list, alias="serviceEndpoints")

    class Config:
        frozen = True
        populate_by_name = True


class InfrastructureConfig(BaseModel):
    """Provider-specific infrastructure configuration.

    Attributes:
        networks: Network settings.
        zoned: True if the cluster spreads its nodes over availability zones
            instead of an availability set.
    """

    networks: NetworkConfig
    zoned: bool = False

    class Config:
        frozen = True
        populate_by_name = True


class InfrastructureResource(BaseModel):
    """The platform resource for which infrastructure is provisioned.

    The namespace doubles as resource group name and cluster name.
    """

    namespace: str = Field(..., description="Namespace of the infrastructure resource.")
    name: str = Field(..., description="Name of the infrastructure resource.")
    region: str = Field(..., description="Azure region to provision into.")

    class Config:
        frozen = True


__all__ = [
    "VNet",
    "NetworkConfig",
    "InfrastructureConfig",
    "InfrastructureResource",
]
