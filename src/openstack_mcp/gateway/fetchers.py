"""Single-resource lookup by identifier."""

from __future__ import annotations

import threading
from typing import Any

from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions as sdk_exceptions

from openstack_mcp.domain.resources import ResourceKind
from openstack_mcp.errors import FetchError, NotFoundError, OperationCancelledError
from openstack_mcp.logging_utils import get_logger


class DetailFetcher:
    """Returns the full backend record of one resource, unprojected."""

    def __init__(self, kind: ResourceKind, client: Any) -> None:
        self.kind = kind
        self._client = client

    def get(self, resource_id: str, cancel: threading.Event | None = None) -> dict[str, object]:
        get_logger(__name__).debug("Fetching %s %s", self.kind.name, resource_id)
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError(f"{self.kind.name} lookup")

        try:
            response = self._client.get(self.kind.detail_url(resource_id))
            sdk_exceptions.raise_from_response(response)
            body = response.json()
        except sdk_exceptions.NotFoundException as exc:
            raise NotFoundError(self.kind.name, resource_id) from exc
        except (sdk_exceptions.SDKException, ksa_exceptions.ClientException, ValueError) as exc:
            raise FetchError(self.kind.name, resource_id, exc) from exc

        record = body.get(self.kind.detail_key) if isinstance(body, dict) else None
        if not isinstance(record, dict):
            raise FetchError(
                self.kind.name,
                resource_id,
                ValueError(f"Response has no '{self.kind.detail_key}' object"),
            )
        return record
