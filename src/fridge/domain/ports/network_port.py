"""Abstract HTTP transport used by the product lookup."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class NetworkPort(ABC):

    @abstractmethod
    async def get(self, url: str, params: dict[str, str]) -> HttpResponse:
        """Issue an HTTP GET and return the raw status and body.

        Connectivity failures and timeouts raise NetworkError. A non-2xx
        status is NOT an error at this level.
        """
