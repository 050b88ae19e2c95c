"""
azadapter/infrastructure/__init__.py

Provides a convenient import interface for the infrastructure submodules:

- keys.py for the Terraform output key names
- state.py for decoding Terraform outputs
- chart_values.py for compiling the Terraform chart values
- status.py for building the infrastructure status

Exports:
  - compute_terraformer_chart_values, compute_chart_values, terraformer_output_keys
  - TerraformState
  - status_from_terraform_state
"""

from azadapter.infrastructure import keys
from azadapter.infrastructure.state import TerraformState
from azadapter.infrastructure.chart_values import (
    AvailabilityMode,
    ChartValues,
    NetworkMode,
    compute_chart_values,
    compute_terraformer_chart_values,
    terraformer_output_keys,
)
from azadapter.infrastructure.status import status_from_terraform_state

__all__ = [
    "keys",
    "TerraformState",
    "AvailabilityMode",
    "ChartValues",
    "NetworkMode",
    "compute_chart_values",
    "compute_terraformer_chart_values",
    "terraformer_output_keys",
    "status_from_terraform_state",
]
