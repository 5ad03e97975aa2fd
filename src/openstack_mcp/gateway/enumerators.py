"""Paginated listing of one resource kind."""

from __future__ import annotations

import threading
from typing import Any

from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions as sdk_exceptions

from openstack_mcp.domain.resources import ResourceKind, Summary
from openstack_mcp.errors import EnumerationError, OperationCancelledError
from openstack_mcp.gateway.pagination import MalformedPageError, iter_pages
from openstack_mcp.logging_utils import get_logger

_PAGE_ERRORS = (
    sdk_exceptions.SDKException,
    ksa_exceptions.ClientException,
    MalformedPageError,
    KeyError,
    TypeError,
    ValueError,
)


class ResourceEnumerator:
    """Lists every resource of one kind, all pages or nothing."""

    def __init__(self, kind: ResourceKind, client: Any, page_size: int = 100) -> None:
        self.kind = kind
        self._client = client
        self._page_size = page_size

    def list(self, cancel: threading.Event | None = None) -> tuple[Summary, ...]:
        logger = get_logger(__name__)
        logger.debug("Listing %s resources", self.kind.name)

        summaries: list[Summary] = []
        pages = 0
        try:
            for records in iter_pages(
                self._client,
                self.kind.list_path,
                self.kind.collection_key,
                page_size=self._page_size,
                cancel=cancel,
            ):
                summaries.extend(self.kind.project(record) for record in records)
                pages += 1
        except _PAGE_ERRORS as exc:
            raise EnumerationError(self.kind.name, exc) from exc

        if cancel is not None and cancel.is_set():
            raise OperationCancelledError(f"{self.kind.name} listing")

        logger.debug(
            "Listed %d %s resources across %d page(s)", len(summaries), self.kind.name, pages
        )
        return tuple(summaries)
