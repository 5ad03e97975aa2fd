"""Error taxonomy for the resource-query gateway.

Every failure that can reach a tool caller is a :class:`GatewayError`
subclass. Each one keeps its context as attributes (kind, identifier,
parameter) and renders itself into the error envelope returned to the MCP
client via :meth:`GatewayError.to_payload`.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for all gateway failures."""

    error_type = "GatewayError"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, object]:
        return {}

    def to_payload(self) -> dict[str, object]:
        error: dict[str, object] = {
            "type": self.error_type,
            "message": self.message,
        }
        error.update({k: v for k, v in self.details().items() if v is not None})
        error["retryable"] = self.retryable
        return {"error": error}


def _describe_cause(cause: BaseException | None) -> str:
    if cause is None:
        return "unknown error"
    text = str(cause).strip()
    return text or type(cause).__name__


class AuthError(GatewayError):
    """Session could not be established. Fatal at startup."""

    error_type = "AuthError"

    def __init__(self, message: str, service: str | None = None) -> None:
        super().__init__(message)
        self.service = service

    def details(self) -> dict[str, object]:
        return {"service": self.service}


class EnumerationError(GatewayError):
    error_type = "EnumerationError"
    retryable = True

    def __init__(self, kind: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Failed to list {kind} resources: {_describe_cause(cause)}")
        self.kind = kind
        self.cause = cause

    def details(self) -> dict[str, object]:
        return {"kind": self.kind}


class NotFoundError(GatewayError):
    error_type = "NotFoundError"

    def __init__(self, kind: str, resource_id: str) -> None:
        super().__init__(f"{kind} '{resource_id}' was not found")
        self.kind = kind
        self.resource_id = resource_id

    def details(self) -> dict[str, object]:
        return {"kind": self.kind, "resource_id": self.resource_id}


class FetchError(GatewayError):
    error_type = "FetchError"
    retryable = True

    def __init__(self, kind: str, resource_id: str, cause: BaseException | None = None) -> None:
        super().__init__(
            f"Failed to get {kind} '{resource_id}': {_describe_cause(cause)}"
        )
        self.kind = kind
        self.resource_id = resource_id
        self.cause = cause

    def details(self) -> dict[str, object]:
        return {"kind": self.kind, "resource_id": self.resource_id}


class UnknownOperationError(GatewayError):
    error_type = "UnknownOperationError"

    def __init__(self, operation: str, available: list[str] | None = None) -> None:
        super().__init__(f"Unknown operation: {operation}")
        self.operation = operation
        self.available = available

    def details(self) -> dict[str, object]:
        return {"operation": self.operation, "available": self.available}


class InvalidParameterError(GatewayError):
    error_type = "InvalidParameterError"

    def __init__(
        self,
        operation: str,
        parameter: str | None,
        reason: str,
        *,
        violation: str | None = None,
        hint: str | None = None,
    ) -> None:
        label = parameter or "<arguments>"
        super().__init__(f"Invalid parameter '{label}' for {operation}: {reason}")
        self.operation = operation
        self.parameter = parameter
        self.reason = reason
        self.violation = violation
        self.hint = hint

    def details(self) -> dict[str, object]:
        return {
            "operation": self.operation,
            "parameter": self.parameter,
            "violation": self.violation,
            "hint": self.hint,
        }


class OperationCancelledError(GatewayError):
    """The caller cancelled the invocation or its deadline passed."""

    error_type = "OperationCancelledError"
    retryable = True

    def __init__(self, operation: str, reason: str = "cancelled") -> None:
        super().__init__(f"{operation} was {reason} before it completed")
        self.operation = operation
        self.reason = reason

    def details(self) -> dict[str, object]:
        return {"operation": self.operation}
