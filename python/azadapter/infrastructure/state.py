"""
azadapter/infrastructure/state.py

Flat view of the Terraform outputs the status extractor needs, plus decoders for
the formats the provisioning engine persists them in:

    - a flat mapping of output name -> string
    - the document printed by `terraform output -json`
    - the state printed by `terraform show -json`

Outputs that are missing (or null) decode to "" because the engine may still be
converging. Outputs of the wrong type, or documents of the wrong shape, raise
DecodeError.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, ValidationError

from azadapter.infrastructure import keys
from azadapter.models.errors import DecodeError
from azadapter.models.terraform import OutputValue, TerraformStateDocument
from azadapter.models.validator import validate_type

logger = logging.getLogger(__name__)


class TerraformState(BaseModel):
    """The named outputs of the Azure infrastructure Terraform configuration.

    Field aliases are the output key names, so a flat output mapping validates
    directly into this model.
    """

    vnet_name: str = Field(default="", alias=keys.TERRAFORMER_OUTPUT_KEY_VNET_NAME)
    vnet_resource_group: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_VNET_RESOURCE_GROUP
    )
    subnet_name: str = Field(default="", alias=keys.TERRAFORMER_OUTPUT_KEY_SUBNET_NAME)
    route_table_name: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_ROUTE_TABLE_NAME
    )
    security_group_name: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_SECURITY_GROUP_NAME
    )
    resource_group_name: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_RESOURCE_GROUP_NAME
    )
    availability_set_id: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_ID
    )
    availability_set_name: str = Field(
        default="", alias=keys.TERRAFORMER_OUTPUT_KEY_AVAILABILITY_SET_NAME
    )

    class Config:
        frozen = True
        populate_by_name = True

    @classmethod
    def from_outputs(cls, outputs: Mapping[str, Any]) -> TerraformState:
        """
        Decode a flat mapping of output name to string value.

        Unknown output names are ignored; null values count as missing.

        Args:
            outputs: Output values keyed by output name.

        Returns:
            The decoded TerraformState.

        Raises:
            DecodeError: If `outputs` is not a mapping or a known output is not a string.
        """
        if not isinstance(outputs, Mapping):
            raise DecodeError(
                f"Terraform outputs must be a mapping, got {type(outputs).__name__}"
            )

        known = {
            name: value
            for name, value in outputs.items()
            if name in keys.ALL_OUTPUT_KEYS and value is not None
        }
        validated = validate_type(known, Dict[str, str])
        missing = [name for name in keys.BASE_OUTPUT_KEYS if not validated.get(name)]
        if missing:
            logger.debug("Terraform outputs not yet populated: %s", missing)
        return cls.model_validate(validated)

    @classmethod
    def from_output_json(cls, text: str) -> TerraformState:
        """
        Decode the document printed by `terraform output -json`.

        Args:
            text: JSON text of the form {"name": {"value": ..., "type": ..., "sensitive": ...}}.

        Returns:
            The decoded TerraformState.

        Raises:
            DecodeError: If the text is not JSON or does not have the expected shape.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Terraform output is not valid JSON: {exc}") from exc

        outputs = validate_type(raw, Dict[str, OutputValue])
        return cls.from_outputs({name: out.value for name, out in outputs.items()})

    @classmethod
    def from_state_document(cls, text: str) -> TerraformState:
        """
        Decode the state printed by `terraform show -json`.

        Args:
            text: JSON text of a Terraform state.

        Returns:
            The decoded TerraformState.

        Raises:
            DecodeError: If the text is not a valid Terraform JSON state.
        """
        try:
            document = TerraformStateDocument.model_validate_json(text)
        except ValidationError as exc:
            raise DecodeError(f"Terraform state could not be decoded: {exc}") from exc

        if document.is_empty():
            logger.debug("Terraform state contains no resources")
        return cls.from_outputs(document.output_values())


__all__ = ["TerraformState"]
