"""CameraPort implementation for line-oriented barcode sources.

USB and Bluetooth handheld scanners usually act as keyboards: every
successful read types the code followed by Enter. This adapter reads
such a stream (stdin, a serial device opened in text mode, a pipe) on a
background thread and reports each non-empty line as a one-code frame.
The decoder in the handheld unit takes care of symbologies, so all the
grocery formats are supported.

The reader only consumes input while a session is armed and disarms
itself after each report, so the same stream can be used for ordinary
prompts between sessions.
"""

from __future__ import annotations

import logging
import threading
from typing import TextIO

from fridge.domain.exceptions import CameraUnavailableError, CaptureSetupError
from fridge.domain.ports.camera_port import (
    GROCERY_SYMBOLOGIES,
    CameraPort,
    ReportCallback,
    Symbology,
)

logger = logging.getLogger(__name__)


class LineStreamScanner(CameraPort):

    supported_symbologies: frozenset[Symbology] = GROCERY_SYMBOLOGIES

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._armed = threading.Event()
        self._on_report: ReportCallback | None = None
        self._reader: threading.Thread | None = None
        self._exhausted = False

    # --- CameraPort interface -------------------------------------------------

    def open_session(
        self, symbologies: frozenset[Symbology], on_report: ReportCallback
    ) -> None:
        with self._lock:
            if self._on_report is not None:
                raise CaptureSetupError("Scanner is already attached to a session")
            if self._exhausted or self._stream.closed:
                raise CameraUnavailableError("Scanner input is closed")

        unsupported = symbologies - self.supported_symbologies
        if unsupported:
            names = ", ".join(sorted(s.value for s in unsupported))
            raise CaptureSetupError(f"Scanner cannot decode {names}")

        with self._lock:
            self._on_report = on_report
            self._armed.set()

        if self._reader is None:
            self._reader = threading.Thread(
                target=self._read_lines, name="line-stream-scanner", daemon=True
            )
            self._reader.start()

    def close_session(self) -> None:
        with self._lock:
            self._on_report = None
            self._armed.clear()

    # --- Reader thread --------------------------------------------------------

    def _read_lines(self) -> None:
        while True:
            self._armed.wait()
            line = self._stream.readline()
            if not line:
                break
            code = line.strip()
            if not code:
                continue

            with self._lock:
                callback = self._on_report
                self._armed.clear()
            if callback is None:
                logger.debug("Dropping code %s read after the session closed", code)
                continue
            callback([code])

        with self._lock:
            self._exhausted = True
        logger.info("Scanner input reached end of stream")
