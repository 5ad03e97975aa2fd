"""The six read-only OpenStack operations, bound to a session."""

from __future__ import annotations

import threading

from openstack_mcp.config import Settings, load_settings
from openstack_mcp.domain.resources import NETWORK, VM, VOLUME, ResourceKind
from openstack_mcp.domain.results import (
    NetworkDetails,
    NetworkList,
    VMDetails,
    VMList,
    VolumeDetails,
    VolumeList,
)
from openstack_mcp.gateway import DetailFetcher, ResourceEnumerator
from openstack_mcp.session import Session
from openstack_mcp.tools.registry import Handler, OperationSpec, ToolRegistry

NO_INPUT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {},
    "additionalProperties": False,
}


def id_schema(parameter: str, description: str) -> dict[str, object]:
    return {
        "type": "object",
        "properties": {
            parameter: {
                "type": "string",
                "minLength": 1,
                "maxLength": 255,
                "description": description,
            },
        },
        "required": [parameter],
        "additionalProperties": False,
    }


def _lister(enumerator: ResourceEnumerator) -> Handler:
    def _list(_arguments: dict[str, object], cancel: threading.Event | None):
        return enumerator.list(cancel)

    return _list


def _getter(fetcher: DetailFetcher, parameter: str) -> Handler:
    def _get(arguments: dict[str, object], cancel: threading.Event | None):
        return fetcher.get(str(arguments[parameter]), cancel)

    return _get


def _kind_operations(
    session: Session,
    kind: ResourceKind,
    *,
    noun: str,
    title: str,
    id_param: str,
    list_type,
    detail_type,
    page_size: int,
) -> list[OperationSpec]:
    client = session.client_for(kind.service)
    enumerator = ResourceEnumerator(kind, client, page_size=page_size)
    fetcher = DetailFetcher(kind, client)
    return [
        OperationSpec(
            name=f"List{noun}s",
            description=f"Lists all {title}s.",
            input_schema=NO_INPUT_SCHEMA,
            result_type=list_type,
            handler=_lister(enumerator),
        ),
        OperationSpec(
            name=f"Get{noun}Details",
            description=f"Gets detailed information about a specific {title}.",
            input_schema=id_schema(id_param, f"The ID of the {title}."),
            result_type=detail_type,
            handler=_getter(fetcher, id_param),
        ),
    ]


def build_registry(session: Session, settings: Settings | None = None) -> ToolRegistry:
    """Declare ListVMs, GetVMDetails, ListNetworks, GetNetworkDetails,
    ListVolumes and GetVolumeDetails against ``session``."""
    settings = settings or load_settings()
    page_size = settings.openstack.page_size

    operations: list[OperationSpec] = []
    operations += _kind_operations(
        session,
        VM,
        noun="VM",
        title="Virtual Machine",
        id_param="vm_id",
        list_type=VMList,
        detail_type=VMDetails,
        page_size=page_size,
    )
    operations += _kind_operations(
        session,
        NETWORK,
        noun="Network",
        title="Network",
        id_param="network_id",
        list_type=NetworkList,
        detail_type=NetworkDetails,
        page_size=page_size,
    )
    operations += _kind_operations(
        session,
        VOLUME,
        noun="Volume",
        title="Volume",
        id_param="volume_id",
        list_type=VolumeList,
        detail_type=VolumeDetails,
        page_size=page_size,
    )
    return ToolRegistry(operations)
