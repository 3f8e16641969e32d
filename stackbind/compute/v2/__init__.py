"""Compute API v2."""

from .api import ComputeApi, ServerQuery
from .protocol import (
    AddressType,
    Ref,
    Server,
    ServerAddress,
    ServerRoot,
    ServersDetailRoot,
    ServerSortKey,
    ServersRoot,
    ServerStatus,
    ServerSummary,
    SortDirection,
)


__all__ = [
    "AddressType",
    "ComputeApi",
    "Ref",
    "Server",
    "ServerAddress",
    "ServerQuery",
    "ServerRoot",
    "ServerSortKey",
    "ServerStatus",
    "ServerSummary",
    "ServersDetailRoot",
    "ServersRoot",
    "SortDirection",
]
