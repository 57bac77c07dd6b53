"""Async client for the tellme service registry"""

from tellme_client.infrastructure.registry import (
    Identifier,
    RegistryClient,
    Service,
    Token,
    get_registry_client,
)
from tellme_client.shared.exceptions import (
    CredentialsMissingError,
    EndpointURLError,
    RegistryDecodeError,
    RegistryError,
    RegistryStatusError,
    RegistryTransportError,
    TellmeError,
)

__all__ = [
    "RegistryClient",
    "get_registry_client",
    "Service",
    "Identifier",
    "Token",
    "TellmeError",
    "RegistryError",
    "CredentialsMissingError",
    "EndpointURLError",
    "RegistryTransportError",
    "RegistryStatusError",
    "RegistryDecodeError",
]
