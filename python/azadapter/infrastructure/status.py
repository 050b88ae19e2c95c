"""
azadapter/infrastructure/status.py

Builds the InfrastructureStatus from the outputs of the provisioning engine.

Everything except the `zoned` flag comes from the engine's state. Availability
sets in particular mirror what the engine produced: the list holds one entry
when the state carries an availability set ID and is empty otherwise.
"""

from __future__ import annotations

import logging

from azadapter.infrastructure.state import TerraformState
from azadapter.models.infrastructure import InfrastructureConfig
from azadapter.models.status import (
    AvailabilitySet,
    InfrastructureStatus,
    NetworkStatus,
    Purpose,
    ResourceGroup,
    RouteTable,
    SecurityGroup,
    Subnet,
    VNetStatus,
)

logger = logging.getLogger(__name__)


def status_from_terraform_state(
    state: TerraformState, config: InfrastructureConfig
) -> InfrastructureStatus:
    """
    Compute the infrastructure status from the decoded Terraform outputs.

    Empty identifiers in the state are passed through as empty strings, they mean
    "not known yet" rather than an error.

    Args:
        state: The decoded Terraform outputs.
        config: The infrastructure configuration, for the zoned flag.

    Returns:
        A fresh InfrastructureStatus.
    """
    availability_sets = (
        [
            AvailabilitySet(
                name=state.availability_set_name,
                id=state.availability_set_id,
                purpose=Purpose.nodes,
            )
        ]
        if state.availability_set_id
        else []
    )
    if config.zoned and availability_sets:
        logger.warning(
            "Zoned cluster reports availability set %r", state.availability_set_id
        )

    status = InfrastructureStatus(
        resource_group=ResourceGroup(name=state.resource_group_name),
        route_tables=[RouteTable(name=state.route_table_name, purpose=Purpose.nodes)],
        security_groups=[
            SecurityGroup(name=state.security_group_name, purpose=Purpose.nodes)
        ],
        availability_sets=availability_sets,
        networks=NetworkStatus(
            vnet=VNetStatus(
                name=state.vnet_name,
                resource_group=state.vnet_resource_group or None,
            ),
            subnets=[Subnet(name=state.subnet_name, purpose=Purpose.nodes)],
        ),
        zoned=config.zoned,
    )
    logger.debug(
        "Computed infrastructure status for resource group %r", state.resource_group_name
    )
    return status


__all__ = ["status_from_terraform_state"]
