from __future__ import annotations

import json
import threading
from unittest.mock import MagicMock

import pytest
import requests

from openstack_mcp import config, logging_utils
from openstack_mcp.session import Session


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)
    # Leave pytest's log capture handlers in place.
    monkeypatch.setattr(logging_utils, "_logging_configured", True)
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


def make_response(
    status: int = 200,
    body: object | None = None,
    *,
    raw: bytes | None = None,
    url: str = "http://cloud.test/",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    if raw is not None:
        response._content = raw
        response.headers["content-type"] = "text/plain"
    else:
        response._content = json.dumps(body if body is not None else {}).encode("utf-8")
        response.headers["content-type"] = "application/json"
    return response


class FakeClient:
    """Stands in for an openstacksdk service proxy.

    ``routes`` maps a URL to the response served for it; a list of responses
    is served in order.
    """

    def __init__(self, routes: dict[str, object] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict[str, object] | None]] = []
        self._lock = threading.Lock()

    def get(self, url: str, params: dict[str, object] | None = None, **_: object):
        with self._lock:
            self.calls.append((url, params))
            route = self.routes[url]
            if isinstance(route, list):
                route = route.pop(0)
        if isinstance(route, BaseException):
            raise route
        if callable(route):
            return route()
        return route


def collection_page(
    key: str,
    records: list[dict[str, object]],
    next_href: str | None = None,
) -> requests.Response:
    body: dict[str, object] = {key: records}
    if next_href is not None:
        body[f"{key}_links"] = [{"rel": "next", "href": next_href}]
    return make_response(200, body)


@pytest.fixture
def fake_session() -> Session:
    return Session(
        connection=MagicMock(),
        region="RegionOne",
        compute=FakeClient(),
        network=FakeClient(),
        volume=FakeClient(),
    )
