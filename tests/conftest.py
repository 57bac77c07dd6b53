"""
Pytest configuration and shared fixtures for all tests.
"""

import json
import os
import tempfile
from urllib.parse import parse_qsl

import httpx
import pytest

from tellme_client.common.singleton_meta import SingletonMeta
from tellme_client.infrastructure.config.read_config import ConfigReader, ConfigSchema
from tellme_client.infrastructure.registry.registry_client import RegistryClient

REGISTRY_URL = "http://registry.test:8080"


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        "registry_endpoint": "http://registry.test:8080",
        "login": "admin",
        "password": "secret",
        "timeout": 5.0,
        "verify_ssl": False,
    }

    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(config_data, f)
        temp_path = f.name

    # Set environment variable to use temp config
    old_config_path = os.environ.get("CONFIG_PATH")
    os.environ["CONFIG_PATH"] = temp_path

    yield temp_path

    # Cleanup
    os.unlink(temp_path)
    if old_config_path:
        os.environ["CONFIG_PATH"] = old_config_path
    else:
        os.environ.pop("CONFIG_PATH", None)


@pytest.fixture
def reset_singletons():
    """Reset singleton instances before and after each test."""
    SingletonMeta.reset_instance(ConfigReader)
    yield
    SingletonMeta.reset_instance(ConfigReader)


@pytest.fixture
def test_config(temp_config_file, reset_singletons) -> ConfigSchema:
    """Provide a test configuration instance."""
    config_reader = ConfigReader()
    return config_reader.config


class RecordingRegistry:
    """Stand-in registry answering every request with a queued response.

    Requests are recorded in order so tests can inspect the method, path,
    query and form fields that reached the wire.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = None
        self.headers: dict[str, str] = {}
        self.raise_error: Exception | None = None

    def reply(
        self,
        body: object = None,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.headers = headers or {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if self.body is None:
            return httpx.Response(self.status_code, headers=self.headers)
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(
                self.status_code, headers=self.headers, content=self.body
            )
        return httpx.Response(self.status_code, headers=self.headers, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> list[tuple[str, str]]:
        """Form fields of the last request, in wire order."""
        return parse_qsl(self.last.content.decode(), keep_blank_values=True)


@pytest.fixture
def registry():
    """Provide a recording registry behind an httpx mock transport."""
    return RecordingRegistry()


@pytest.fixture
def transport(registry):
    return httpx.MockTransport(registry.handler)


@pytest.fixture
def admin_client(transport) -> RegistryClient:
    """Client holding administrator credentials."""
    return RegistryClient(REGISTRY_URL, "admin", "secret", transport=transport)


@pytest.fixture
def anonymous_client(transport) -> RegistryClient:
    """Client without credentials, limited to register and find."""
    return RegistryClient(REGISTRY_URL, transport=transport)


@pytest.fixture
def service_record() -> dict:
    """A Service record exactly as the registry sends it."""
    return {
        "service_type": "storage node",
        "available": True,
        "healthcheck_endpoint": "/healthcheck_endpoint",
        "is_accepted": False,
        "identifier": "abc123",
        "ip": "http://10.0.0.5:4567/",
    }


# Pytest asyncio configuration
pytest_plugins = ["pytest_asyncio"]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
