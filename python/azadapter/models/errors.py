"""
azadapter/models/errors.py

Exceptions raised by the config/state translation layer.

    - ConfigurationError: the infrastructure configuration contradicts itself
      or references data the cloud profile does not provide.
    - DecodeError: provisioning engine output could not be decoded into the
      expected flat shape.
"""

from __future__ import annotations

from typing import Optional


class InfrastructureError(Exception):
    """Base error for the Azure infrastructure adapter."""


class ConfigurationError(InfrastructureError):
    """Represents a configuration contradiction detected while compiling chart values.

    Attributes:
        message (str): Human readable description of the problem.
        field (Optional[str]): Dotted path of the offending configuration field.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize a ConfigurationError.

        Args:
            message (str): Human readable description of the problem.
            field (Optional[str]): Dotted path of the offending field, if known.
        """
        super().__init__(message)
        self.field = field


class DecodeError(InfrastructureError):
    """Represents a provisioning engine state that cannot be decoded."""


__all__ = ["InfrastructureError", "ConfigurationError", "DecodeError"]
