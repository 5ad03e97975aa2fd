"""Page-by-page iteration over OpenStack collection endpoints.

Nova, Neutron and Cinder share one pagination protocol: a ``limit`` query
parameter caps the page size and the response carries a
``<collection>_links`` list whose ``rel="next"`` entry is the URL of the
following page. :func:`iter_pages` turns that protocol into a lazy sequence
of record lists.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import Any

from openstack import exceptions as sdk_exceptions


class MalformedPageError(ValueError):
    """A page body did not have the shape of a collection response."""


def iter_pages(
    client: Any,
    path: str,
    collection_key: str,
    *,
    page_size: int,
    cancel: threading.Event | None = None,
) -> Iterator[list[dict[str, object]]]:
    """Yield the records of each page of ``path`` in backend order.

    The next page is only requested once the consumer asks for it, so a
    failing page stops the iteration before anything further is fetched.
    If ``cancel`` is set when a page is due, iteration stops without
    requesting it; the caller checks the event to tell that apart from the
    last page.

    Raises:
        openstack.exceptions.HttpException: a page returned an HTTP error.
        MalformedPageError: a page body was not a collection response.
    """
    url: str | None = path
    params: dict[str, object] | None = {"limit": page_size}
    seen: set[str] = set()

    while url is not None:
        if cancel is not None and cancel.is_set():
            return
        response = client.get(url, params=params)
        sdk_exceptions.raise_from_response(response)
        body = _json_body(response)

        records = body.get(collection_key)
        if not isinstance(records, list):
            raise MalformedPageError(f"Response has no '{collection_key}' list")
        yield records

        url = _next_link(body, collection_key)
        # The next link already carries limit and marker.
        params = None
        if url is not None:
            if url in seen:
                raise MalformedPageError(f"Pagination loop detected at {url}")
            seen.add(url)


def _json_body(response: Any) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise MalformedPageError(f"Response is not JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise MalformedPageError("Response body is not a JSON object")
    return body


def _next_link(body: dict[str, Any], collection_key: str) -> str | None:
    links = body.get(f"{collection_key}_links") or []
    if not isinstance(links, list):
        return None
    for link in links:
        if isinstance(link, dict) and link.get("rel") == "next":
            href = link.get("href")
            if isinstance(href, str) and href:
                return href
    return None
