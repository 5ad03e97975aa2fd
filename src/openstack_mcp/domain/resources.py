"""Resource kinds and their summary projections."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass
from typing import Union
from urllib.parse import quote


@dataclass(frozen=True)
class VMSummary:
    id: str
    name: str
    status: str

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> VMSummary:
        return cls(
            id=str(record["id"]),
            name=_name(record),
            status=str(record["status"]),
        )

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class NetworkSummary:
    id: str
    name: str

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> NetworkSummary:
        return cls(id=str(record["id"]), name=_name(record))

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class VolumeSummary:
    id: str
    name: str
    status: str
    size_gb: int

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> VolumeSummary:
        size = record["size"]
        if isinstance(size, bool) or not isinstance(size, (int, float, str)):
            raise ValueError(f"Unexpected volume size: {size!r}")
        return cls(
            id=str(record["id"]),
            name=_name(record),
            status=str(record["status"]),
            size_gb=int(size),
        )

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


Summary = Union[VMSummary, NetworkSummary, VolumeSummary]


def _name(record: Mapping[str, object]) -> str:
    # Cinder allows unnamed volumes and reports them with a null name.
    name = record.get("name")
    return "" if name is None else str(name)


@dataclass(frozen=True)
class ResourceKind:
    """Where one kind of resource lives in the control plane.

    ``service`` names the session sub-client, ``list_path`` and
    ``collection_key`` describe the paginated listing, and
    ``detail_path``/``detail_key`` the single-resource lookup.
    """

    name: str
    service: str
    list_path: str
    collection_key: str
    detail_path: str
    detail_key: str
    project: Callable[[Mapping[str, object]], Summary]

    def detail_url(self, resource_id: str) -> str:
        return self.detail_path.format(id=quote(resource_id, safe=""))


VM = ResourceKind(
    name="vm",
    service="compute",
    list_path="/servers/detail",
    collection_key="servers",
    detail_path="/servers/{id}",
    detail_key="server",
    project=VMSummary.from_record,
)

NETWORK = ResourceKind(
    name="network",
    service="network",
    list_path="/networks",
    collection_key="networks",
    detail_path="/networks/{id}",
    detail_key="network",
    project=NetworkSummary.from_record,
)

VOLUME = ResourceKind(
    name="volume",
    service="volume",
    list_path="/volumes/detail",
    collection_key="volumes",
    detail_path="/volumes/{id}",
    detail_key="volume",
    project=VolumeSummary.from_record,
)
