"""Tool registration helpers.

Every operation in the dispatch registry becomes one MCP tool:
- ListVMs / GetVMDetails
- ListNetworks / GetNetworkDetails
- ListVolumes / GetVolumeDetails
"""

from __future__ import annotations

import asyncio
import threading

from openstack_mcp.errors import (
    GatewayError,
    InvalidParameterError,
    NotFoundError,
    OperationCancelledError,
    UnknownOperationError,
)
from openstack_mcp.logging_utils import get_logger
from openstack_mcp.mcp_runtime import MCPServer, ToolResult, ToolSpec
from openstack_mcp.tools.base import error_result, result_from_payload
from openstack_mcp.tools.registry import ToolRegistry

__all__ = ["get_tool_specs", "register_tools"]

_CALLER_ERRORS = (InvalidParameterError, NotFoundError, UnknownOperationError)


def _dispatch_handler(registry: ToolRegistry, name: str, timeout: float | None):
    async def _handler(arguments: dict[str, object]) -> ToolResult:
        logger = get_logger(__name__)
        logger.info("Executing %s", name)
        cancel = threading.Event()
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(registry.invoke, name, arguments, cancel),
                timeout,
            )
        except asyncio.TimeoutError:
            cancel.set()
            logger.error("%s exceeded its %ss deadline", name, timeout)
            return error_result(OperationCancelledError(name, reason="timed out"))
        except asyncio.CancelledError:
            cancel.set()
            logger.info("%s cancelled by caller", name)
            raise
        except _CALLER_ERRORS as exc:
            logger.warning("%s failed: %s", name, exc)
            return error_result(exc)
        except GatewayError as exc:
            logger.error("%s failed: %s", name, exc)
            return error_result(exc)
        return result_from_payload(result.to_payload())

    return _handler


def get_tool_specs(registry: ToolRegistry, timeout: float | None = None) -> list[ToolSpec]:
    return [
        ToolSpec(
            name=operation.name,
            description=operation.description,
            input_schema=operation.input_schema,
            handler=_dispatch_handler(registry, operation.name, timeout),
        )
        for operation in registry.operations()
    ]


def register_tools(
    server: MCPServer,
    registry: ToolRegistry,
    timeout: float | None = None,
) -> None:
    """Register every registry operation with the MCP server."""
    logger = get_logger(__name__)
    specs = get_tool_specs(registry, timeout)
    logger.info("Registering %d OpenStack tools", len(specs))

    for tool in specs:
        server.add_tool(tool)

    logger.info("Registered tools: %s", ", ".join(tool.name for tool in specs))
