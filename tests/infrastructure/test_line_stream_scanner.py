"""Tests for the line-oriented scanner adapter."""

import io
import threading

import pytest

from fridge.application.scan_capture import ScanCaptureController, ScanState
from fridge.domain.exceptions import CameraUnavailableError, CaptureSetupError
from fridge.domain.ports.camera_port import GROCERY_SYMBOLOGIES, Symbology
from fridge.infrastructure.scanner.line_stream_scanner import LineStreamScanner


class _Collector:

    def __init__(self) -> None:
        self.reports: list[list[str]] = []
        self.received = threading.Event()

    def __call__(self, codes) -> None:
        self.reports.append(list(codes))
        self.received.set()


class TestLineStreamScanner:

    def test_first_non_blank_line_is_reported(self):
        scanner = LineStreamScanner(io.StringIO("\n  \n4006381333931\n96385074\n"))
        collector = _Collector()

        scanner.open_session(GROCERY_SYMBOLOGIES, collector)

        assert collector.received.wait(5)
        assert collector.reports == [["4006381333931"]]

    def test_reads_one_code_per_session(self):
        stream = io.StringIO("111\n222\n")
        scanner = LineStreamScanner(stream)

        first = _Collector()
        scanner.open_session(GROCERY_SYMBOLOGIES, first)
        assert first.received.wait(5)
        scanner.close_session()

        second = _Collector()
        scanner.open_session(GROCERY_SYMBOLOGIES, second)
        assert second.received.wait(5)
        scanner.close_session()

        assert first.reports == [["111"]]
        assert second.reports == [["222"]]

    def test_closed_stream_is_unavailable(self):
        stream = io.StringIO("")
        stream.close()
        with pytest.raises(CameraUnavailableError):
            LineStreamScanner(stream).open_session(GROCERY_SYMBOLOGIES, _Collector())

    def test_unknown_symbology_rejected(self):
        class EanOnly(LineStreamScanner):
            supported_symbologies = frozenset({Symbology.EAN_13})

        with pytest.raises(CaptureSetupError, match="CODE-128"):
            EanOnly(io.StringIO("")).open_session(GROCERY_SYMBOLOGIES, _Collector())

    def test_second_session_while_attached_rejected(self):
        scanner = LineStreamScanner(io.StringIO(""))
        scanner.open_session(GROCERY_SYMBOLOGIES, _Collector())
        with pytest.raises(CaptureSetupError):
            scanner.open_session(GROCERY_SYMBOLOGIES, _Collector())

    def test_drives_the_controller(self):
        scanner = LineStreamScanner(io.StringIO("4006381333931\n"))
        controller = ScanCaptureController(scanner)
        completed = _Collector()

        controller.start(lambda code: completed([code]))

        assert completed.received.wait(5)
        assert completed.reports == [["4006381333931"]]
        assert controller.state is ScanState.IDLE

    def test_exhausted_stream_is_unavailable(self):
        scanner = LineStreamScanner(io.StringIO("111\n"))
        first = _Collector()
        scanner.open_session(GROCERY_SYMBOLOGIES, first)
        assert first.received.wait(5)
        scanner.close_session()

        # Arming again lets the reader hit end of stream.
        scanner.open_session(GROCERY_SYMBOLOGIES, _Collector())
        scanner._reader.join(5)
        scanner.close_session()

        with pytest.raises(CameraUnavailableError):
            scanner.open_session(GROCERY_SYMBOLOGIES, _Collector())
