"""httpx-backed implementation of NetworkPort."""

from __future__ import annotations

import logging

import httpx

from fridge.domain.exceptions import NetworkError
from fridge.domain.ports.network_port import HttpResponse, NetworkPort

logger = logging.getLogger(__name__)


class HttpxNetwork(NetworkPort):

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    async def get(self, url: str, params: dict[str, str]) -> HttpResponse:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.TimeoutException as exc:
                logger.warning("Request to %s timed out", url)
                raise NetworkError(f"Request to {url} timed out", cause=exc) from exc
            except httpx.HTTPError as exc:
                logger.warning("Request to %s failed: %s", url, exc)
                raise NetworkError(f"Request to {url} failed: {exc}", cause=exc) from exc
        return HttpResponse(status_code=response.status_code, body=response.text)
