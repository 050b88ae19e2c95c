"""
azadapter/models/terraform.py

Defines Pydantic models for the documents the Terraform CLI prints, including:
 - OutputValue: one entry of `terraform output -json`, or of the outputs block
   in `terraform show -json`.
 - TerraformStateDocument: a parsed `terraform show -json` state.

The flat view of the outputs that the status extractor consumes lives in
azadapter/infrastructure/state.py.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


class OutputValue(BaseModel):
    """Represents a Terraform output value as parsed from 'terraform output -json'.

    Attributes:
        sensitive: True if the output is marked sensitive.
        value: Arbitrary data from the Terraform output.
        type: Optional Terraform type hint (string, list, etc.).
    """

    sensitive: bool = False
    value: Any
    type: Union[str, List[Any], None] = None


class Values(BaseModel):
    """Represents the 'values' block in a Terraform JSON state.

    Attributes:
        outputs: Mapping of output_name -> OutputValue for all outputs.
        root_module: Dictionary containing resources and possibly child modules.
    """

    outputs: Dict[str, OutputValue] = Field(default_factory=dict)
    root_module: Dict[str, Any] = Field(default_factory=dict)


class TerraformStateDocument(BaseModel):
    """Represents a Terraform JSON state at a high level.

    Attributes:
        format_version: The format version string of the Terraform state.
        terraform_version: The version of Terraform that generated this state, absent
            before the first apply.
        values: A Values instance including outputs and resource info.
    """

    format_version: str
    terraform_version: Optional[str] = None
    values: Values = Field(default_factory=Values)

    def _count_resources_in_module(self, module_data: Dict[str, Any]) -> int:
        """Recursively count resources in a module, including child modules."""
        resources = module_data.get("resources")
        resources_count = len(resources) if isinstance(resources, list) else 0

        child_modules = module_data.get("child_modules")
        child_sum = (
            sum(
                self._count_resources_in_module(child)
                for child in child_modules
                if isinstance(child, dict)
            )
            if isinstance(child_modules, list)
            else 0
        )
        return resources_count + child_sum

    def is_empty(self) -> bool:
        """Check if this Terraform state contains zero resources.

        Returns:
            True if no resources are present, otherwise False.
        """
        return self._count_resources_in_module(self.values.root_module) == 0

    def output_values(self) -> Dict[str, Any]:
        """Return the raw value of every output, keyed by output name."""
        return {name: out.value for name, out in self.values.outputs.items()}
