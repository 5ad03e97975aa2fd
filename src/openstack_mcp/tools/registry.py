"""Tool dispatch registry.

Maps operation names to their parameter schema, result variant and bound
handler. Invocations are validated in full before the handler runs, so a
malformed call never reaches the control plane.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from openstack_mcp.domain.results import QueryResult
from openstack_mcp.errors import InvalidParameterError, UnknownOperationError
from openstack_mcp.utils.jsonschema import validate_payload_structured

Handler = Callable[[dict[str, object], "threading.Event | None"], Any]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    description: str
    input_schema: dict[str, object]
    result_type: Callable[[Any], QueryResult]
    handler: Handler

    @property
    def result_key(self) -> str:
        return getattr(self.result_type, "result_key")


class ToolRegistry:
    def __init__(self, operations: Iterable[OperationSpec] = ()) -> None:
        self._operations: dict[str, OperationSpec] = {}
        for operation in operations:
            self.register(operation)

    def register(self, operation: OperationSpec) -> None:
        if operation.name in self._operations:
            raise ValueError(f"Operation already registered: {operation.name}")
        self._operations[operation.name] = operation

    def names(self) -> list[str]:
        return list(self._operations)

    def operations(self) -> list[OperationSpec]:
        return list(self._operations.values())

    def get(self, name: str) -> OperationSpec:
        operation = self._operations.get(name)
        if operation is None:
            raise UnknownOperationError(name, available=self.names())
        return operation

    def validate(self, name: str, params: object) -> dict[str, object]:
        """Return ``params`` as a dict or raise for the first violation."""
        operation = self.get(name)
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise InvalidParameterError(name, None, "arguments must be a JSON object")

        errors = validate_payload_structured(operation.input_schema, params)
        if errors:
            first = errors[0]
            raise InvalidParameterError(
                name,
                first.parameter,
                first.message,
                violation=first.type,
                hint=first.hint,
            )
        return params

    def invoke(
        self,
        name: str,
        params: object = None,
        cancel: threading.Event | None = None,
    ) -> QueryResult:
        operation = self.get(name)
        arguments = self.validate(name, params)
        return operation.result_type(operation.handler(arguments, cancel))
