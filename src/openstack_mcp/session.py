"""Authenticated session against the OpenStack control plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import openstack
from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions as sdk_exceptions

from openstack_mcp.config import DEFAULT_REGION, Settings, load_settings
from openstack_mcp.errors import AuthError
from openstack_mcp.logging_utils import get_logger

# session attribute -> openstacksdk Connection proxy attribute
SERVICE_PROXIES: dict[str, str] = {
    "compute": "compute",
    "network": "network",
    "volume": "block_storage",
}

_SDK_ERRORS = (sdk_exceptions.SDKException, ksa_exceptions.ClientException)


@dataclass(frozen=True)
class Session:
    """One authenticated binding to the control plane.

    Created once per process by :func:`establish` and shared read-only by
    every enumerator and fetcher.
    """

    connection: Any
    region: str
    compute: Any
    network: Any
    volume: Any

    def client_for(self, service: str) -> Any:
        if service not in SERVICE_PROXIES:
            raise KeyError(f"Unknown service: {service}")
        return getattr(self, service)


def resolve_region(settings: Settings) -> str:
    region = settings.openstack.region
    if not region:
        get_logger(__name__).warning(
            "OS_REGION_NAME not set, using default region %s", DEFAULT_REGION
        )
        return DEFAULT_REGION
    return region


def establish(settings: Settings | None = None) -> Session:
    """Authenticate from the environment and bind the three service clients.

    Raises:
        AuthError: credentials are missing, malformed or rejected, or one of
            the compute/network/volume services is absent from the catalog.
    """
    settings = settings or load_settings()
    logger = get_logger(__name__)
    region = resolve_region(settings)

    try:
        connection = openstack.connect(
            cloud=settings.openstack.cloud,
            region_name=region,
            load_envvars=True,
            api_timeout=settings.openstack.api_timeout_seconds,
        )
        connection.authorize()
    except _SDK_ERRORS as exc:
        logger.error("Error authenticating with OpenStack: %s", exc)
        raise AuthError(f"Authentication failed: {exc}") from exc

    logger.info("Authenticated with OpenStack (region=%s)", region)

    clients: dict[str, Any] = {}
    for service, proxy_attr in SERVICE_PROXIES.items():
        clients[service] = _bind_service(connection, service, proxy_attr)

    return Session(connection=connection, region=region, **clients)


def _bind_service(connection: Any, service: str, proxy_attr: str) -> Any:
    logger = get_logger(__name__)
    try:
        proxy = getattr(connection, proxy_attr)
        endpoint = proxy.get_endpoint()
    except _SDK_ERRORS as exc:
        logger.error("Error creating %s client: %s", service, exc)
        raise AuthError(f"Failed to create {service} client: {exc}", service=service) from exc
    if not endpoint:
        logger.error("No %s endpoint in the service catalog", service)
        raise AuthError(
            f"Failed to create {service} client: no endpoint in the service catalog",
            service=service,
        )
    logger.debug("Bound %s client to %s", service, endpoint)
    return proxy
