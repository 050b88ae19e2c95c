"""
models/api_keys/__init__.py

Aggregate imports so credential models can be accessed directly from this package.

Any new pydantic models should go in /python/azadapter/models if they
are not specifically for credentials.
"""

from azadapter.models.api_keys.azure import ClientAuth

__all__ = [
    "ClientAuth",
]
