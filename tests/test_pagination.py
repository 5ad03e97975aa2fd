from __future__ import annotations

import threading

import pytest
from conftest import FakeClient, collection_page, make_response
from openstack import exceptions as sdk_exceptions

from openstack_mcp.gateway.pagination import MalformedPageError, iter_pages


def test_single_page_without_links() -> None:
    client = FakeClient({"/networks": collection_page("networks", [{"id": "n1"}])})

    pages = list(iter_pages(client, "/networks", "networks", page_size=50))

    assert pages == [[{"id": "n1"}]]
    assert client.calls == [("/networks", {"limit": 50})]


def test_follows_next_links_in_order() -> None:
    next1 = "http://nova.test/v2.1/servers/detail?limit=2&marker=b"
    next2 = "http://nova.test/v2.1/servers/detail?limit=2&marker=d"
    client = FakeClient(
        {
            "/servers/detail": collection_page("servers", [{"id": "a"}, {"id": "b"}], next1),
            next1: collection_page("servers", [{"id": "c"}, {"id": "d"}], next2),
            next2: collection_page("servers", [{"id": "e"}]),
        }
    )

    pages = list(iter_pages(client, "/servers/detail", "servers", page_size=2))

    assert [[r["id"] for r in page] for page in pages] == [["a", "b"], ["c", "d"], ["e"]]
    # Follow-up requests use the link as-is, without re-sending limit.
    assert client.calls == [
        ("/servers/detail", {"limit": 2}),
        (next1, None),
        (next2, None),
    ]


def test_pages_are_pulled_lazily() -> None:
    next1 = "http://neutron.test/v2.0/networks?marker=x"
    client = FakeClient(
        {
            "/networks": collection_page("networks", [{"id": "x"}], next1),
            next1: collection_page("networks", []),
        }
    )

    pages = iter_pages(client, "/networks", "networks", page_size=1)
    assert client.calls == []
    next(pages)
    assert len(client.calls) == 1


def test_ignores_non_next_links() -> None:
    body = {
        "volumes": [{"id": "v"}],
        "volumes_links": [{"rel": "previous", "href": "http://cinder.test/prev"}],
    }
    client = FakeClient({"/volumes/detail": make_response(200, body)})

    pages = list(iter_pages(client, "/volumes/detail", "volumes", page_size=10))

    assert pages == [[{"id": "v"}]]


def test_http_error_raises_sdk_exception() -> None:
    client = FakeClient({"/networks": make_response(503, {"message": "unavailable"})})

    with pytest.raises(sdk_exceptions.HttpException):
        list(iter_pages(client, "/networks", "networks", page_size=10))


def test_missing_collection_key_is_malformed() -> None:
    client = FakeClient({"/networks": make_response(200, {"ports": []})})

    with pytest.raises(MalformedPageError, match="networks"):
        list(iter_pages(client, "/networks", "networks", page_size=10))


def test_non_json_body_is_malformed() -> None:
    response = make_response(200, raw=b"<html>oops</html>")
    client = FakeClient({"/networks": response})

    with pytest.raises(MalformedPageError, match="not JSON"):
        list(iter_pages(client, "/networks", "networks", page_size=10))


def test_repeated_next_link_is_rejected() -> None:
    loop = "http://neutron.test/v2.0/networks?marker=same"
    client = FakeClient(
        {
            "/networks": collection_page("networks", [{"id": "1"}], loop),
            loop: [
                collection_page("networks", [{"id": "2"}], loop),
            ],
        }
    )

    with pytest.raises(MalformedPageError, match="loop"):
        list(iter_pages(client, "/networks", "networks", page_size=1))


def test_cancel_stops_before_next_request() -> None:
    next1 = "http://neutron.test/v2.0/networks?marker=1"
    client = FakeClient(
        {
            "/networks": collection_page("networks", [{"id": "1"}], next1),
            next1: collection_page("networks", [{"id": "2"}]),
        }
    )
    cancel = threading.Event()

    pages = iter_pages(client, "/networks", "networks", page_size=1, cancel=cancel)
    first = next(pages)
    cancel.set()
    rest = list(pages)

    assert first == [{"id": "1"}]
    assert rest == []
    assert len(client.calls) == 1
