"""
azadapter/infrastructure/keys.py

Names of the outputs the Terraform configuration exposes. The chart value
compiler hands these to the engine under `outputKeys`, and the state decoder
reads the engine's outputs back under the very same names, so both sides must
only ever refer to these constants.
"""

from typing import List

TERRAFORMER_OUTPUT_KEY_RESOURCE_GROUP_NAME = "resourceGroupName"
TERRAFORMER_OUTPUT_KEY_VNET_NAME = "vnetName"
TERRAFORMER_OUTPUT_KEY_VNET_RESOURCE_GROUP = "vnetResourceGroup"
TERRAFORMER_OUTPUT_KEY_SUBNET_NAME = "subnetName"
TERRAFORMER_OUTPUT_KEY_ROUTE_TABLE_NAME = "routeTableName"
TERRAFORMER_OUTPUT_KEY_SECURITY_GROUP_NAME = "securityGroupName"
TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_ID = "availabilitySetID"
TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_NAME = "availabilitySetName"

# Always requested, whatever the cluster's mode.
BASE_OUTPUT_KEYS: List[str] = [
    TERRAFORMER_OUTPUT_KEY_RESOURCE_GROUP_NAME,
    TERRAFORMER_OUTPUT_KEY_VNET_NAME,
    TERRAFORMER_OUTPUT_KEY_SUBNET_NAME,
    TERRAFORMER_OUTPUT_KEY_ROUTE_TABLE_NAME,
    TERRAFORMER_OUTPUT_KEY_SECURITY_GROUP_NAME,
]

# Only requested when an existing virtual network is reused.
EXISTING_VNET_OUTPUT_KEYS: List[str] = [
    TERRAFORMER_OUTPUT_KEY_VNET_RESOURCE_GROUP,
]

# Only requested when the cluster is not zoned.
AVAILABILITY_SET_OUTPUT_KEYS: List[str] = [
    TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_ID,
    TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_NAME,
]

ALL_OUTPUT_KEYS: List[str] = (
    BASE_OUTPUT_KEYS + EXISTING_VNET_OUTPUT_KEYS + AVAILABILITY_SET_OUTPUT_KEYS
)
