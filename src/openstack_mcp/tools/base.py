"""Tool helpers."""

from __future__ import annotations

import json

from openstack_mcp.errors import GatewayError
from openstack_mcp.mcp_runtime import ToolResult


def result_from_payload(payload: dict[str, object], is_error: bool = False) -> ToolResult:
    text = json.dumps(payload, ensure_ascii=True, indent=2, default=str)
    content = [{"type": "text", "text": text}]
    return ToolResult(content=content, structured_content=payload, is_error=is_error)


def error_result(error: GatewayError) -> ToolResult:
    return result_from_payload(error.to_payload(), is_error=True)
