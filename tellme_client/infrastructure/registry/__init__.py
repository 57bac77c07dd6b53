"""init for registry package"""

from tellme_client.infrastructure.registry.models import Identifier, Service, Token
from tellme_client.infrastructure.registry.registry_client import (
    RegistryClient,
    get_registry_client,
)

__all__ = [
    "Identifier",
    "Service",
    "Token",
    "RegistryClient",
    "get_registry_client",
]
