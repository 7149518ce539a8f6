"""Abstract barcode capture device.

A capture session delivers one report per frame in which at least one
code was recognized. Reports may arrive on any thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from enum import Enum


class Symbology(Enum):
    EAN_13 = "EAN-13"
    EAN_8 = "EAN-8"
    CODE_128 = "CODE-128"


GROCERY_SYMBOLOGIES: frozenset[Symbology] = frozenset(
    {Symbology.EAN_13, Symbology.EAN_8, Symbology.CODE_128}
)

ReportCallback = Callable[[Sequence[str]], None]


class CameraPort(ABC):

    @abstractmethod
    def open_session(
        self, symbologies: frozenset[Symbology], on_report: ReportCallback
    ) -> None:
        """Acquire the device and start delivering reports to ``on_report``.

        Raises CameraUnavailableError when there is no device and
        CaptureSetupError when the session cannot be configured. On
        failure no resource is held.
        """

    @abstractmethod
    def close_session(self) -> None:
        """Stop delivering reports and release the device."""
