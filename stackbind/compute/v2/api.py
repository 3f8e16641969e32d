"""Compute v2 API calls."""

from urllib.parse import quote

from stackbind.exceptions import ConfigurationError
from stackbind.http.client import Client
from stackbind.http.response import ApiResult

from .protocol import (
    ServerRoot,
    ServersDetailRoot,
    ServerSortKey,
    ServersRoot,
    SortDirection,
)


__all__ = ["ComputeApi", "ServerQuery"]


class ServerQuery:
    """Query parameters for listing servers.

    Sort keys apply in the order they are added. Paging is marker based:
    pass the id of the last server of the previous page as ``marker``.
    """

    def __init__(self) -> None:
        self._sort: list[tuple[ServerSortKey, SortDirection]] = []
        self._limit: int | None = None
        self._marker: str | None = None

    def sort_by(
        self,
        key: ServerSortKey | str,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> "ServerQuery":
        """Add a sort key.

        Raises:
            ValueError: If the key or direction is not a known value
        """
        self._sort.append((ServerSortKey(key), SortDirection(direction)))
        return self

    def with_limit(self, limit: int) -> "ServerQuery":
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self._limit = limit
        return self

    def with_marker(self, marker: str) -> "ServerQuery":
        self._marker = marker
        return self

    def params(self) -> list[tuple[str, str]]:
        """Query string parameters, in a stable order."""
        params: list[tuple[str, str]] = []
        for key, direction in self._sort:
            params.append(("sort_key", key.value))
            params.append(("sort_dir", direction.value))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        if self._marker is not None:
            params.append(("marker", self._marker))
        return params


class ComputeApi:
    """Requests against one Compute v2 endpoint."""

    def __init__(self, client: Client, endpoint: str | None = None) -> None:
        endpoint = endpoint or client.settings.compute.endpoint
        if not endpoint:
            raise ConfigurationError(
                "Compute endpoint is not configured",
                details={"setting": "compute.endpoint"},
            )
        self.client = client
        self.endpoint = endpoint.rstrip("/")

    def _url(self, *parts: str) -> str:
        return "/".join([self.endpoint, *(quote(part, safe="") for part in parts)])

    def list_servers(self, query: ServerQuery | None = None) -> ApiResult[ServersRoot]:
        """List servers (id and name only)."""
        request = self.client.build_request(
            "GET", self._url("servers"), params=query.params() if query else None
        )
        return self.client.fetch(request, ServersRoot)

    def list_servers_detailed(
        self, query: ServerQuery | None = None
    ) -> ApiResult[ServersDetailRoot]:
        """List servers with all their details."""
        request = self.client.build_request(
            "GET",
            self._url("servers", "detail"),
            params=query.params() if query else None,
        )
        return self.client.fetch(request, ServersDetailRoot)

    def get_server(self, server_id: str) -> ApiResult[ServerRoot]:
        """Fetch one server by id."""
        request = self.client.build_request("GET", self._url("servers", server_id))
        return self.client.fetch(request, ServerRoot)
