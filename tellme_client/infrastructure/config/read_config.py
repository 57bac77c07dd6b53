"""module for reading client configuration"""

import json
import os

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    model_validator,
)

from tellme_client.common.singleton_meta import SingletonMeta


class ConfigSchema(BaseModel):
    """Config Schema for validation"""

    model_config = ConfigDict(extra="forbid")

    registry_endpoint: HttpUrl = Field(
        default_factory=lambda: HttpUrl(
            os.getenv("TELLME_REGISTRY_URL", "http://localhost:8080")
        ),
        description="Service registry base address",
    )
    login: str | None = Field(
        default_factory=lambda: os.getenv("TELLME_LOGIN", None),
        description="Registry administrator login",
    )
    password: str | None = Field(
        default_factory=lambda: os.getenv("TELLME_PASSWORD", None),
        description="Registry administrator password",
    )
    timeout: float | None = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds, null disables it",
    )
    verify_ssl: bool = True

    @model_validator(mode="after")
    def check_credentials_pair(self) -> "ConfigSchema":
        """Validate that login and password are given together."""
        if (self.login is None) != (self.password is None):
            raise ValueError("login and password must be set together")
        return self


class ConfigReader(metaclass=SingletonMeta):
    """Class for loading user configuration"""

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        self._initialized = True

        path = os.environ.get("CONFIG_PATH", "config.json")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found at {path}")

        with open(path, "r") as config_file:
            try:
                config_data = json.load(config_file)
            except json.JSONDecodeError as ex:
                raise json.JSONDecodeError(
                    msg=(
                        "Config json failed loading with the "
                        f"following exception: {ex}"
                    ),
                    doc=ex.doc,
                    pos=ex.pos,
                ) from ex

            try:
                self.config = ConfigSchema(**config_data)
            except ValidationError as err:
                raise err


def get_config() -> ConfigReader:
    """Get the global configuration instance."""
    return ConfigReader()
