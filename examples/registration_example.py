"""Example registration flow against a running tellme registry.

Reads the registry address and administrator credentials from the config
file (CONFIG_PATH, default config.json) and walks one service through the
whole lifecycle. The process is expected to serve its own healthcheck and
webhook endpoints; this script only talks to the registry.
"""

import asyncio

from tellme_client import RegistryError, get_registry_client
from tellme_client.infrastructure.logging.logging_config import (
    get_logger,
    setup_logging,
)

MY_PORT = 4567

logger = get_logger("registration_example")


async def main() -> int:
    """Register, accept, subscribe and disable this process."""
    client = get_registry_client()

    try:
        access_token = await client.newtoken()

        identifier = await client.register(
            MY_PORT, "/healthcheck_endpoint", access_token, "storage node"
        )

        # With login and password we can accept ourselves; otherwise an
        # administrator has to do it.
        await client.accept_service(identifier)

        await client.subscribe(identifier, True, False, "/hook/on_registration")
        await client.subscribe(identifier, False, True, "/hook/on_acceptance")

        for service in await client.find(service_type="storage node", limit=10):
            logger.info(
                f"{service.identifier} at {service.ip} "
                f"(available={service.available}, accepted={service.is_accepted})"
            )

        await client.disable_service(identifier)
    except RegistryError as e:
        logger.error(f"Registry call failed: {e.to_dict()}")
        return 1

    return 0


if __name__ == "__main__":
    setup_logging()
    raise SystemExit(asyncio.run(main()))
