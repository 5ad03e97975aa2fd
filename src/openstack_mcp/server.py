"""Entrypoint for the OpenStack MCP server."""

from __future__ import annotations

import sys
from pathlib import Path

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # pragma: no cover

from openstack_mcp import __version__
from openstack_mcp.config import load_settings
from openstack_mcp.errors import AuthError
from openstack_mcp.logging_utils import configure_logging, get_logger
from openstack_mcp.mcp_runtime import MCPServer
from openstack_mcp.session import establish
from openstack_mcp.tools import register_tools
from openstack_mcp.tools.openstack import build_registry


def build_server() -> MCPServer:
    """Authenticate, then create the MCP server with all tools registered.

    Raises:
        AuthError: the control-plane session could not be established.
    """
    settings = load_settings()
    configure_logging()
    logger = get_logger(__name__)
    logger.info("Starting OpenStack MCP Server v%s", __version__)

    session = establish(settings)
    registry = build_registry(session, settings)

    server = MCPServer(
        name="openstack-mcp",
        version=__version__,
        instructions=settings.server.instructions,
    )
    register_tools(server, registry, timeout=settings.server.invocation_timeout_seconds)
    logger.info("MCP server setup complete (region=%s)", session.region)
    return server


def run_entrypoint() -> None:
    """Run the server based on transport settings."""
    settings = load_settings()
    try:
        server = build_server()
    except AuthError as exc:
        get_logger(__name__).error("Error initializing OpenStack clients: %s", exc)
        raise SystemExit(1) from exc

    if settings.server.transport_mode == "http":
        server.run(transport="http", host=settings.server.host, port=settings.server.port)
    else:
        server.run()


if __name__ == "__main__":  # pragma: no cover
    run_entrypoint()
