"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from .http_client import HTTPClient


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" only; the token endpoint is driven by the auth layer
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


HeadersFactory = Callable[[], Awaitable[dict[str, str]]]


class RestRunner:
    def __init__(self, http: HTTPClient, headers: HeadersFactory | None = None) -> None:
        self._http = http
        self._headers = headers

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        if spec.method.upper() != "GET":
            raise ValueError(f"Unsupported method for {spec.id}: {spec.method}")

        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        # Resolved per request so a refreshed token is picked up mid-run
        headers = await self._headers() if self._headers else None

        data = await self._http.get(path, params=query, headers=headers)
        return adapter.parse(data, params)
