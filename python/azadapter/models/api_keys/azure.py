"""
filename: azadapter/models/api_keys/azure.py

Provides the ClientAuth pydantic model for Azure service principal credentials.
"""

from typing import Dict
from pydantic import BaseModel, Field


class ClientAuth(BaseModel):
    """Azure service principal credentials used by the provisioning engine.

    The secret is kept out of repr() so the model can be logged or printed
    without leaking it.
    """

    subscription_id: str = Field(..., alias="subscriptionID", description="Azure Subscription ID")
    tenant_id: str = Field(..., alias="tenantID", description="Azure Tenant ID")
    client_id: str = Field(..., alias="clientID", description="Azure Client ID")
    client_secret: str = Field(
        ..., alias="clientSecret", description="Azure Client Secret", repr=False
    )

    class Config:
        frozen = True
        populate_by_name = True

    def to_env_dict(self) -> Dict[str, str]:
        """Converts Azure credentials to environment variables.

        Returns:
            Dict[str, str]: A dictionary containing ARM_* environment variables.
        """
        return {
            "ARM_CLIENT_ID": self.client_id,
            "ARM_CLIENT_SECRET": self.client_secret,
            "ARM_TENANT_ID": self.tenant_id,
            "ARM_SUBSCRIPTION_ID": self.subscription_id,
        }


__all__ = ["ClientAuth"]
