"""
azadapter/models/status.py

Defines the Pydantic models for the infrastructure status written back onto the
platform's infrastructure resource once the provisioning engine has converged.

All list fields default to empty lists, never None, so consumers can iterate
without checks. `InfrastructureStatus.to_dict()` renders the camelCase wire
document, including the apiVersion/kind marker.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

STATUS_API_VERSION = "azure.provider.extensions.gardener.cloud/v1alpha1"
STATUS_KIND = "InfrastructureStatus"


class Purpose(str, Enum):
    nodes = "nodes"


class ResourceGroup(BaseModel):
    name: str

    class Config:
        frozen = True


class RouteTable(BaseModel):
    name: str
    purpose: Purpose

    class Config:
        frozen = True


class SecurityGroup(BaseModel):
    name: str
    purpose: Purpose

    class Config:
        frozen = True


class AvailabilitySet(BaseModel):
    """An availability set, only present for clusters that are not zoned."""

    name: str
    id: str
    purpose: Purpose

    class Config:
        frozen = True


class Subnet(BaseModel):
    name: str
    purpose: Purpose

    class Config:
        frozen = True


class VNetStatus(BaseModel):
    """Status of the virtual network.

    Attributes:
        name: Name of the virtual network.
        resource_group: Resource group of a reused virtual network, None when
            the network lives in the cluster's own resource group.
    """

    name: str
    resource_group: Optional[str] = Field(default=None, alias="resourceGroup")

    class Config:
        frozen = True
        populate_by_name = True


class NetworkStatus(BaseModel):
    vnet: VNetStatus
    subnets: List[Subnet] = Field(default_factory=list)

    class Config:
        frozen = True


class InfrastructureStatus(BaseModel):
    """Typed status of the provisioned Azure infrastructure.

    Attributes:
        api_version: Schema version marker for the consuming platform.
        kind: Schema kind marker for the consuming platform.
        resource_group: The resource group holding the cluster's resources.
        route_tables: Route tables, each tagged with its purpose.
        security_groups: Security groups, each tagged with its purpose.
        availability_sets: Availability sets; empty for zoned clusters.
        networks: Virtual network and subnets.
        zoned: Carried over from the infrastructure configuration.
    """

    api_version: str = Field(default=STATUS_API_VERSION, alias="apiVersion")
    kind: str = STATUS_KIND
    resource_group: ResourceGroup = Field(..., alias="resourceGroup")
    route_tables: List[RouteTable] = Field(default_factory=list, alias="routeTables")
    security_groups: List[SecurityGroup] = Field(
        default_factory=list, alias="securityGroups"
    )
    availability_sets: List[AvailabilitySet] = Field(
        default_factory=list, alias="availabilitySets"
    )
    networks: NetworkStatus
    zoned: bool = False

    class Config:
        frozen = True
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase document stored on the platform resource."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "STATUS_API_VERSION",
    "STATUS_KIND",
    "Purpose",
    "ResourceGroup",
    "RouteTable",
    "SecurityGroup",
    "AvailabilitySet",
    "Subnet",
    "VNetStatus",
    "NetworkStatus",
    "InfrastructureStatus",
]
