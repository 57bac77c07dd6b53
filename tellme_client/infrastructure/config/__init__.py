"""init for config package"""

from tellme_client.infrastructure.config.read_config import (
    ConfigReader,
    ConfigSchema,
    get_config,
)

__all__ = [
    "ConfigReader",
    "ConfigSchema",
    "get_config",
]
