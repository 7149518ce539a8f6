"""In-memory fakes for the ports.

These implement the same abstract interfaces as the real adapters but
keep everything in memory. No file I/O, no network, no devices.
"""

from __future__ import annotations

from collections.abc import Sequence

from fridge.domain.ports.camera_port import CameraPort, ReportCallback, Symbology
from fridge.domain.ports.network_port import HttpResponse, NetworkPort
from fridge.domain.ports.persistence_port import PersistencePort


class FakePersistence(PersistencePort):

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.store: dict[str, bytes] = dict(initial or {})
        self.writes = 0
        self.fail_writes = False

    def read_bytes(self, key: str) -> bytes | None:
        return self.store.get(key)

    def write_bytes(self, key: str, data: bytes) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.store[key] = data
        self.writes += 1


class FakeNetwork(NetworkPort):

    def __init__(
        self,
        response: HttpResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response or HttpResponse(200, '{"title": "Whole Milk"}')
        self.error = error
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def get(self, url: str, params: dict[str, str]) -> HttpResponse:
        self.calls.append((url, dict(params)))
        if self.error is not None:
            raise self.error
        return self.response


class FakeCamera(CameraPort):

    def __init__(self, open_error: Exception | None = None) -> None:
        self.open_error = open_error
        self.opened = 0
        self.closed = 0
        self.symbologies: frozenset[Symbology] | None = None
        self._on_report: ReportCallback | None = None
        self.callbacks: list[ReportCallback] = []

    @property
    def is_open(self) -> bool:
        return self._on_report is not None

    def open_session(
        self, symbologies: frozenset[Symbology], on_report: ReportCallback
    ) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened += 1
        self.symbologies = symbologies
        self._on_report = on_report
        self.callbacks.append(on_report)

    def close_session(self) -> None:
        self.closed += 1
        self._on_report = None

    def emit(self, codes: Sequence[str]) -> None:
        """Simulate a frame in which ``codes`` were recognized."""
        if self._on_report is not None:
            self._on_report(codes)
