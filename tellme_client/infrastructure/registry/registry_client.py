"""HTTP client for service registry operations"""

from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from tellme_client.infrastructure.config import get_config
from tellme_client.infrastructure.logging.logging_config import get_logger
from tellme_client.infrastructure.registry.models import Identifier, Service, Token
from tellme_client.shared.exceptions import (
    CredentialsMissingError,
    EndpointURLError,
    RegistryDecodeError,
    RegistryStatusError,
    RegistryTransportError,
)

logger = get_logger("registry_client")

_IDENTIFIER = TypeAdapter(Identifier)
_TOKEN = TypeAdapter(Token)
_SERVICES = TypeAdapter(List[Service])


def render_bool(value: bool) -> str:
    """Render a boolean the way the registry parses it."""
    return "true" if value else "false"


class RegistryClient:
    """HTTP client for interacting with the tellme service registry

    The client only holds its base address and optional administrator
    credentials. Each call opens its own ``httpx.AsyncClient``, so a single
    instance can be shared between concurrent tasks.

    Args:
        base_url: Absolute http(s) address of the registry.
        login: Administrator login, required by accept, disable, newtoken
            and subscribe.
        password: Administrator password, paired with ``login``.
        timeout: Transport timeout in seconds, ``None`` disables it.
        verify_ssl: Whether TLS certificates are verified.
        transport: Optional httpx transport used for every request.
    """

    def __init__(
        self,
        base_url: str,
        login: Optional[str] = None,
        password: Optional[str] = None,
        *,
        timeout: Optional[float] = 10.0,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = str(base_url)
        self._login = login
        self._password = password
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def login(self) -> Optional[str]:
        return self._login

    @property
    def password(self) -> Optional[str]:
        return self._password

    def __repr__(self) -> str:
        return f"RegistryClient(base_url={self._base_url!r}, login={self._login!r})"

    def _require_credentials(self, operation: str) -> Tuple[str, str]:
        """Return the credential pair or fail before any request is built."""
        if self._login is None or self._password is None:
            raise CredentialsMissingError(operation)
        return self._login, self._password

    def _endpoint(self, path: str) -> httpx.URL:
        """Join an operation path onto the registry base address."""
        try:
            base = httpx.URL(self._base_url)
        except httpx.InvalidURL as e:
            raise EndpointURLError(
                f"Invalid registry address {self._base_url!r}: {e}",
                context={"base_url": self._base_url, "path": path},
                cause=e,
            ) from e

        if base.scheme not in ("http", "https") or not base.host:
            raise EndpointURLError(
                f"Registry address {self._base_url!r} is not an absolute "
                f"http(s) URL",
                context={"base_url": self._base_url, "path": path},
            )

        return base.join(path)

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[List[Tuple[str, str]]] = None,
        data: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request and fail on anything but a 2xx answer."""
        url = self._endpoint(path)
        logger.debug(f"{method} {url}")

        async with httpx.AsyncClient(
            timeout=self._timeout, verify=self._verify_ssl, transport=self._transport
        ) as client:
            try:
                response = await client.request(
                    method, url, params=params or None, data=data
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                raise RegistryStatusError(
                    f"Registry answered {status_code} to {method} {path}",
                    status_code=status_code,
                    context={
                        "url": str(url),
                        "status_code": status_code,
                        "body": e.response.text,
                    },
                    cause=e,
                ) from e
            except httpx.DecodingError as e:
                raise RegistryDecodeError(
                    f"Undecodable response body from {path}: {e}",
                    context={"url": str(url)},
                    cause=e,
                ) from e
            except httpx.TransportError as e:
                raise RegistryTransportError(
                    f"Registry unreachable for {method} {path}: {e}",
                    context={"url": str(url)},
                    cause=e,
                ) from e

        return response

    @staticmethod
    def _decode(response: httpx.Response, adapter: TypeAdapter, path: str):
        """Decode a successful body into the shape promised by the operation."""
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            raise RegistryDecodeError(
                f"Unexpected response body from {path}: {e.error_count()} "
                f"validation error(s)",
                context={"path": path, "body": response.text},
                cause=e,
            ) from e

    async def register(
        self,
        port: int,
        healthcheck_endpoint: str,
        access_token: str,
        service_type: str,
    ) -> str:
        """Register the calling process as a service

        Authorization is carried by ``access_token`` (see ``newtoken``), not
        by the stored credentials.

        Returns:
            str: The identifier the registry assigned to the new record.
        """
        response = await self._send(
            "POST",
            "/me",
            data={
                "healthcheck_endpoint": healthcheck_endpoint,
                "access_token": access_token,
                "service_type": service_type,
                "port": str(port),
            },
        )
        answer = self._decode(response, _IDENTIFIER, "/me")

        logger.info(
            f"Registered {service_type} service on port {port} "
            f"as {answer.identifier}"
        )
        return answer.identifier

    async def accept_service(self, identifier: str) -> None:
        """Mark a registered service as accepted"""
        login, password = self._require_credentials("accept_service")

        await self._send(
            "POST",
            "/accept_service",
            data={"identifier": identifier, "login": login, "password": password},
        )
        logger.info(f"Accepted service: {identifier}")

    async def disable_service(self, identifier: str) -> None:
        """Mark a registered service as disabled"""
        login, password = self._require_credentials("disable_service")

        await self._send(
            "POST",
            "/disable_service",
            data={"identifier": identifier, "login": login, "password": password},
        )
        logger.info(f"Disabled service: {identifier}")

    async def newtoken(self) -> str:
        """Request a fresh access token for ``register``

        The token is returned as is; the client keeps no copy of it.
        """
        login, password = self._require_credentials("newtoken")

        response = await self._send(
            "POST", "/newtoken", data={"login": login, "password": password}
        )
        answer = self._decode(response, _TOKEN, "/newtoken")

        logger.debug("Obtained new access token")
        return answer.token

    async def find(
        self,
        service_type: Optional[str] = None,
        limit: Optional[int] = None,
        available: Optional[bool] = None,
    ) -> List[Service]:
        """Query the registry for services

        Only the filters that are given end up in the query string; the
        registry applies its own defaults for the others. Results are
        returned in registry order.

        Args:
            service_type: Only services of this type.
            limit: Maximum number of records, sent as given.
            available: Only services whose healthcheck passes (or fails).

        Returns:
            List[Service]: The matching records, possibly empty.
        """
        query_params: List[Tuple[str, str]] = []

        if service_type is not None:
            query_params.append(("service_type", service_type))
        if limit is not None:
            query_params.append(("limit", str(limit)))
        if available is not None:
            query_params.append(("available", render_bool(available)))

        response = await self._send("GET", "/find", params=query_params)
        services = self._decode(response, _SERVICES, "/find")

        logger.debug(f"Found {len(services)} services in registry")
        return services

    async def subscribe(
        self,
        identifier: str,
        on_registration: bool,
        on_acceptance: bool,
        endpoint: str,
    ) -> None:
        """Ask the registry to call ``endpoint`` on registration and/or acceptance

        The caller runs the receiving endpoint; this only records the
        subscription on the registry side.
        """
        login, password = self._require_credentials("subscribe")

        await self._send(
            "POST",
            "/subscribe",
            data={
                "login": login,
                "password": password,
                "identifier": identifier,
                "endpoint": endpoint,
                "on_registration": render_bool(on_registration),
                "on_acceptance": render_bool(on_acceptance),
            },
        )
        logger.info(
            f"Subscribed {endpoint} to service {identifier} "
            f"(registration={on_registration}, acceptance={on_acceptance})"
        )


def get_registry_client() -> RegistryClient:
    """Get a registry client built from the loaded configuration

    Returns:
        RegistryClient: A client for the configured registry
    """
    config = get_config().config
    return RegistryClient(
        str(config.registry_endpoint),
        config.login,
        config.password,
        timeout=config.timeout,
        verify_ssl=config.verify_ssl,
    )
