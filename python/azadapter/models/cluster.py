"""
azadapter/models/cluster.py

Cluster context handed to the chart value compiler. The only cluster data the
compiler needs is the cloud profile's per-region fault and update domain counts,
which apply to clusters that place their nodes in an availability set.
"""

from __future__ import annotations

from typing import List, Tuple
from pydantic import BaseModel, Field

from azadapter.models.errors import ConfigurationError


class DomainCount(BaseModel):
    """Number of fault or update domains available in a region."""

    region: str
    count: int = Field(..., ge=0)

    class Config:
        frozen = True


class CloudProfileConfig(BaseModel):
    """Provider-specific part of the cloud profile.

    Attributes:
        count_fault_domains: Fault domain count per region.
        count_update_domains: Update domain count per region.
    """

    count_fault_domains: List[DomainCount] = Field(
        default_factory=list, alias="countFaultDomains"
    )
    count_update_domains: List[DomainCount] = Field(
        default_factory=list, alias="countUpdateDomains"
    )

    class Config:
        frozen = True
        populate_by_name = True


def find_domain_count_by_region(
    domain_counts: List[DomainCount], region: str, field: str
) -> int:
    """
    Return the domain count configured for `region`.

    Args:
        domain_counts: Per-region counts from the cloud profile.
        region: Region to look up.
        field: Name of the cloud profile field, used in the error.

    Returns:
        The configured count.

    Raises:
        ConfigurationError: If the region has no entry.
    """
    matches = [dc.count for dc in domain_counts if dc.region == region]
    if not matches:
        raise ConfigurationError(
            f"could not find a domain count for region {region!r}", field=field
        )
    return matches[0]


class ClusterContext(BaseModel):
    """Cluster data the compiler reads, resolved from the cloud profile."""

    cloud_profile_config: CloudProfileConfig = Field(
        default_factory=CloudProfileConfig, alias="cloudProfileConfig"
    )

    class Config:
        frozen = True
        populate_by_name = True

    def domain_counts(self, region: str) -> Tuple[int, int]:
        """Look up the (fault domain, update domain) counts for a region.

        Raises:
            ConfigurationError: If either count is missing for the region.
        """
        fault = find_domain_count_by_region(
            self.cloud_profile_config.count_fault_domains,
            region,
            "countFaultDomains",
        )
        update = find_domain_count_by_region(
            self.cloud_profile_config.count_update_domains,
            region,
            "countUpdateDomains",
        )
        return fault, update


__all__ = [
    "DomainCount",
    "CloudProfileConfig",
    "ClusterContext",
    "find_domain_count_by_region",
]
