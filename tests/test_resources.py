from __future__ import annotations

import pytest

from openstack_mcp.domain.resources import NETWORK, VM, VOLUME, VolumeSummary
from openstack_mcp.domain.results import NetworkDetails, VMList


def test_kinds_map_to_session_services() -> None:
    assert [(k.name, k.service) for k in (VM, NETWORK, VOLUME)] == [
        ("vm", "compute"),
        ("network", "network"),
        ("volume", "volume"),
    ]


def test_detail_url_quotes_identifier() -> None:
    assert VM.detail_url("abc") == "/servers/abc"
    assert VM.detail_url("a b/c") == "/servers/a%20b%2Fc"


def test_volume_size_accepts_numeric_strings() -> None:
    summary = VolumeSummary.from_record({"id": "v", "name": "n", "status": "available", "size": "8"})

    assert summary.size_gb == 8


@pytest.mark.parametrize("size", [None, True, [1]])
def test_volume_size_rejects_non_numbers(size) -> None:
    with pytest.raises(ValueError):
        VolumeSummary.from_record({"id": "v", "name": "n", "status": "available", "size": size})


def test_result_variants_render_under_their_key() -> None:
    assert VMList().to_payload() == {"vms": []}
    assert NetworkDetails({"id": "n1", "mtu": 1450}).to_payload() == {
        "network_details": {"id": "n1", "mtu": 1450}
    }
