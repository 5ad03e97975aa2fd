"""MCP runtime adapter over FastMCP."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, cast

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as FastToolResult
from mcp.types import TextContent
from pydantic import BaseModel, PrivateAttr

logger = logging.getLogger(__name__)


@dataclass
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, object]
    handler: Callable[[dict[str, object]], "ToolResult | Awaitable[ToolResult]"]


class ToolResult(BaseModel):
    content: list[dict[str, object]]
    structured_content: dict[str, object] | None = None
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(
            str(block.get("text", "")) for block in self.content if block.get("type") == "text"
        )


class MCPServer:
    """Thin wrapper that registers :class:`ToolSpec` handlers on FastMCP."""

    def __init__(self, name: str, version: str, instructions: str) -> None:
        self._server = FastMCP(name=name, version=version, instructions=instructions)

    def add_tool(self, tool: ToolSpec) -> None:
        self._server.add_tool(_to_fastmcp_tool(tool))
        logger.debug("Registered tool %s", tool.name)

    def run(self, transport: str = "stdio", host: str | None = None, port: int | None = None) -> None:
        if transport == "stdio":
            self._server.run()
            return
        self._server.run(transport=transport, host=host, port=port)


class _SchemaTool(Tool):
    """FastMCP tool that hands call arguments to a :class:`ToolSpec` handler.

    Arguments are passed through unchanged so the handler's own schema
    validation reports unknown or malformed parameters.
    """

    _spec: ToolSpec = PrivateAttr()

    async def run(self, arguments: dict[str, Any]) -> FastToolResult:
        filtered = {k: v for k, v in arguments.items() if v is not None}
        raw_result = self._spec.handler(filtered)
        if _is_awaitable(raw_result):
            result = await cast(Awaitable[ToolResult], raw_result)
        else:
            result = cast(ToolResult, raw_result)
        if not isinstance(result, ToolResult):
            raise TypeError("Tool handler did not return ToolResult")
        if result.is_error:
            raise ToolError(result.text)
        return FastToolResult(
            content=[TextContent(type="text", text=result.text)],
            structured_content=result.structured_content,
        )


def _to_fastmcp_tool(tool: ToolSpec) -> Tool:
    fast_tool = _SchemaTool(
        name=tool.name,
        description=tool.description,
        parameters=tool.input_schema,
    )
    fast_tool._spec = tool
    return fast_tool


def _is_awaitable(value: object) -> bool:
    try:
        return inspect.isawaitable(value)
    except TypeError:
        return False
