"""ScanCaptureController: one barcode per scanning session.

A capture device keeps reporting the same physical barcode frame after
frame. The controller turns that stream into exactly one completion per
session and releases the device as soon as the first code is seen, so
nothing downstream ever has to deduplicate detections.

State machine::

    IDLE --start()--> SCANNING --first code--> COMPLETED --release--> IDLE
                         |
                         +--cancel()--> IDLE

Reports arrive on the device's own thread. They are handed to
``dispatch`` (for an asyncio host, ``loop.call_soon_threadsafe``) so the
state machine only ever runs on the owning control sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from fridge.domain.exceptions import AlreadyScanningError
from fridge.domain.ports.camera_port import GROCERY_SYMBOLOGIES, CameraPort, Symbology

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str], None]
Dispatcher = Callable[..., Any]


class ScanState(Enum):
    IDLE = "IDLE"
    SCANNING = "SCANNING"
    COMPLETED = "COMPLETED"


def _call_inline(fn: Callable[..., Any], *args: Any) -> None:
    fn(*args)


class ScanCaptureController:

    def __init__(
        self,
        camera: CameraPort,
        dispatch: Dispatcher | None = None,
        symbologies: frozenset[Symbology] = GROCERY_SYMBOLOGIES,
    ) -> None:
        self._camera = camera
        self._dispatch = dispatch or _call_inline
        self._symbologies = symbologies
        self._state = ScanState.IDLE
        self._session = 0
        self._on_complete: CompletionCallback | None = None
        self._last_code: str | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def last_code(self) -> str | None:
        """The code delivered by the most recent completed session."""
        return self._last_code

    # --- Transitions ----------------------------------------------------------

    def start(self, on_complete: CompletionCallback) -> None:
        """Open a capture session; ``on_complete`` fires once with the code.

        Raises AlreadyScanningError while a session is active, and lets
        CameraUnavailableError / CaptureSetupError through with the
        controller left IDLE.
        """
        if self._state is ScanState.SCANNING:
            raise AlreadyScanningError("A scanning session is already active")

        self._session += 1
        session = self._session

        def on_report(codes: Sequence[str]) -> None:
            self._dispatch(self._handle_report, session, tuple(codes))

        self._on_complete = on_complete
        self._state = ScanState.SCANNING
        try:
            self._camera.open_session(self._symbologies, on_report)
        except Exception:
            self._state = ScanState.IDLE
            self._on_complete = None
            raise
        logger.info("Scan session %d started", session)

    def cancel(self) -> None:
        if self._state is not ScanState.SCANNING:
            return
        self._on_complete = None
        self._release()
        logger.info("Scan session %d cancelled", self._session)

    # --- Report handling ------------------------------------------------------

    def _handle_report(self, session: int, codes: tuple[str, ...]) -> None:
        # Late reports from a finished or cancelled session are dropped.
        if session != self._session or self._state is not ScanState.SCANNING:
            return
        if not codes:
            return

        code = codes[0]
        self._state = ScanState.COMPLETED
        self._last_code = code
        callback = self._on_complete
        self._on_complete = None
        self._release()
        logger.info("Scan session %d completed with %s", session, code)

        if callback is not None:
            callback(code)

    def _release(self) -> None:
        try:
            self._camera.close_session()
        finally:
            self._state = ScanState.IDLE
