"""Typed query results, one variant per tool result key."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from openstack_mcp.domain.resources import NetworkSummary, VMSummary, VolumeSummary


@dataclass(frozen=True)
class VMList:
    result_key: ClassVar[str] = "vms"
    items: tuple[VMSummary, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class NetworkList:
    result_key: ClassVar[str] = "networks"
    items: tuple[NetworkSummary, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class VolumeList:
    result_key: ClassVar[str] = "volumes"
    items: tuple[VolumeSummary, ...] = ()

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class VMDetails:
    result_key: ClassVar[str] = "vm_details"
    record: dict[str, object] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: self.record}


@dataclass(frozen=True)
class NetworkDetails:
    result_key: ClassVar[str] = "network_details"
    record: dict[str, object] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: self.record}


@dataclass(frozen=True)
class VolumeDetails:
    result_key: ClassVar[str] = "volume_details"
    record: dict[str, object] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        return {self.result_key: self.record}


QueryResult = Union[VMList, VMDetails, NetworkList, NetworkDetails, VolumeList, VolumeDetails]
