"""
azadapter/infrastructure/chart_values.py

Compiles the infrastructure configuration of a cluster into the values of the
Terraform chart run by the terraformer.

The two mode switches (zoned vs. availability set, new vs. existing virtual
network) are resolved once up front into enums; every section of the chart reads
the resolved mode rather than re-deriving it from the configuration.

The resulting tree is built from typed pydantic models and dumped with aliases,
so the wire keys (`azure.*`, `create.*`, `resourceGroup.*`, `identity.enabled`,
`clusterName`, `networks.worker`, `outputKeys.*`) are fixed in one place.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from azadapter.infrastructure import keys
from azadapter.models.api_keys.azure import ClientAuth
from azadapter.models.cluster import ClusterContext
from azadapter.models.errors import ConfigurationError
from azadapter.models.infrastructure import (
    InfrastructureConfig,
    InfrastructureResource,
    VNet,
)

logger = logging.getLogger(__name__)


class AvailabilityMode(str, Enum):
    zoned = "zoned"
    availability_set = "availabilitySet"


class NetworkMode(str, Enum):
    new = "new"
    existing = "existing"


def resolve_availability_mode(config: InfrastructureConfig) -> AvailabilityMode:
    """Return how nodes are spread: over zones, or within an availability set."""
    return AvailabilityMode.zoned if config.zoned else AvailabilityMode.availability_set


def resolve_network_mode(vnet: VNet) -> NetworkMode:
    """
    Decide whether the virtual network is created or an existing one is reused.

    Args:
        vnet: The virtual network descriptor.

    Returns:
        NetworkMode.new if only a CIDR is given, NetworkMode.existing if only a
        resource group (and a name) is given.

    Raises:
        ConfigurationError: If the descriptor gives both, neither, or a resource
            group without a network name.
    """
    if vnet.cidr is not None and vnet.resource_group is not None:
        raise ConfigurationError(
            "vnet must either specify a cidr to create a network or a resource group "
            "to reuse an existing one, not both",
            field="networks.vnet",
        )
    if vnet.cidr is not None:
        return NetworkMode.new
    if vnet.resource_group is not None:
        if not vnet.name:
            raise ConfigurationError(
                "vnet name is required when reusing an existing network",
                field="networks.vnet.name",
            )
        return NetworkMode.existing
    raise ConfigurationError(
        "vnet must specify either a cidr or a resource group",
        field="networks.vnet",
    )


def _output_keys_for(network: NetworkMode, availability: AvailabilityMode) -> List[str]:
    return (
        keys.BASE_OUTPUT_KEYS
        + (keys.EXISTING_VNET_OUTPUT_KEYS if network is NetworkMode.existing else [])
        + (
            keys.AVAILABILITY_SET_OUTPUT_KEYS
            if availability is AvailabilityMode.availability_set
            else []
        )
    )


def terraformer_output_keys(config: InfrastructureConfig) -> List[str]:
    """
    Return the names of the outputs the engine exposes for this configuration.

    Raises:
        ConfigurationError: If the virtual network descriptor is contradictory.
    """
    return _output_keys_for(
        resolve_network_mode(config.networks.vnet), resolve_availability_mode(config)
    )


# ----------------------------------------------------------------------
# Typed chart sections
# ----------------------------------------------------------------------


class _Values(BaseModel):
    class Config:
        frozen = True
        populate_by_name = True


class AzureValues(_Values):
    subscription_id: str = Field(..., alias="subscriptionID")
    tenant_id: str = Field(..., alias="tenantID")
    region: str
    count_fault_domains: Optional[int] = Field(default=None, alias="countFaultDomains")
    count_update_domains: Optional[int] = Field(default=None, alias="countUpdateDomains")


class CreateValues(_Values):
    resource_group: bool = Field(default=True, alias="resourceGroup")
    vnet: bool
    availability_set: bool = Field(..., alias="availabilitySet")


class VNetValues(_Values):
    name: str
    cidr: Optional[str] = None
    resource_group: Optional[str] = Field(default=None, alias="resourceGroup")


class SubnetValues(_Values):
    service_endpoints: List[str] = Field(default_factory=list, alias="serviceEndpoints")


class ResourceGroupValues(_Values):
    name: str
    vnet: VNetValues
    subnet: SubnetValues


class IdentityValues(_Values):
    # Reserved for managed identities; nothing enables it yet.
    enabled: bool = False


class NetworksValues(_Values):
    worker: str


class ChartValues(_Values):
    """Values of the Terraform chart, before serialization."""

    azure: AzureValues
    create: CreateValues
    resource_group: ResourceGroupValues = Field(..., alias="resourceGroup")
    identity: IdentityValues = Field(default_factory=IdentityValues)
    cluster_name: str = Field(..., alias="clusterName")
    networks: NetworksValues
    output_keys: Dict[str, str] = Field(..., alias="outputKeys")

    def to_tree(self) -> Dict[str, Any]:
        """Dump to the nested mapping the chart templates consume."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_yaml(self) -> str:
        """Serialize the chart values to a YAML string using PyYAML."""
        return yaml.safe_dump(self.to_tree(), sort_keys=True)


def compute_chart_values(
    infra: InfrastructureResource,
    client_auth: ClientAuth,
    config: InfrastructureConfig,
    cluster: ClusterContext,
) -> ChartValues:
    """
    Compute the typed Terraform chart values for an infrastructure resource.

    Args:
        infra: The infrastructure resource; its namespace names the resource
            group and the cluster.
        client_auth: Azure credentials; only the subscription and tenant IDs
            end up in the chart.
        config: The provider-specific infrastructure configuration.
        cluster: Cluster context holding the cloud profile's domain counts.

    Returns:
        The chart values.

    Raises:
        ConfigurationError: If the virtual network descriptor is contradictory or
            the cloud profile lacks domain counts for a non-zoned cluster's region.
    """
    availability = resolve_availability_mode(config)
    network = resolve_network_mode(config.networks.vnet)
    logger.debug(
        "Computing chart values for %s/%s: network=%s, availability=%s",
        infra.namespace,
        infra.name,
        network.value,
        availability.value,
    )

    fault_domains: Optional[int] = None
    update_domains: Optional[int] = None
    if availability is AvailabilityMode.availability_set:
        fault_domains, update_domains = cluster.domain_counts(infra.region)

    vnet = config.networks.vnet
    vnet_values = (
        VNetValues(name=infra.namespace, cidr=vnet.cidr)
        if network is NetworkMode.new
        else VNetValues(name=vnet.name, resource_group=vnet.resource_group)
    )

    return ChartValues(
        azure=AzureValues(
            subscription_id=client_auth.subscription_id,
            tenant_id=client_auth.tenant_id,
            region=infra.region,
            count_fault_domains=fault_domains,
            count_update_domains=update_domains,
        ),
        create=CreateValues(
            resource_group=True,
            vnet=network is NetworkMode.new,
            availability_set=availability is AvailabilityMode.availability_set,
        ),
        resource_group=ResourceGroupValues(
            name=infra.namespace,
            vnet=vnet_values,
            subnet=SubnetValues(service_endpoints=list(config.networks.service_endpoints)),
        ),
        identity=IdentityValues(enabled=False),
        cluster_name=infra.namespace,
        networks=NetworksValues(worker=config.networks.workers),
        output_keys={key: key for key in _output_keys_for(network, availability)},
    )


def compute_terraformer_chart_values(
    infra: InfrastructureResource,
    client_auth: ClientAuth,
    config: InfrastructureConfig,
    cluster: ClusterContext,
) -> Dict[str, Any]:
    """
    Compute the Terraform chart values as the nested mapping handed to the terraformer.

    See compute_chart_values for arguments and errors.
    """
    return compute_chart_values(infra, client_auth, config, cluster).to_tree()


__all__ = [
    "AvailabilityMode",
    "NetworkMode",
    "ChartValues",
    "resolve_availability_mode",
    "resolve_network_mode",
    "terraformer_output_keys",
    "compute_chart_values",
    "compute_terraformer_chart_values",
]
