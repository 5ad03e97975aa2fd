"""Backend access: paginated enumeration and detail lookup."""

from openstack_mcp.gateway.enumerators import ResourceEnumerator
from openstack_mcp.gateway.fetchers import DetailFetcher

__all__ = ["DetailFetcher", "ResourceEnumerator"]
