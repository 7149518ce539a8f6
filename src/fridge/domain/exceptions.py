"""Domain-level exceptions.

Every failure the core can produce is a subclass of DomainException so
the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class DuplicateIdError(DomainException):
    """An item with the same id is already stored."""


class PersistenceDecodeError(DomainException):
    """Saved inventory state could not be decoded.

    Recovered inside ``InventoryStore.load()``; never reaches a caller.
    """


# --- Scanning -----------------------------------------------------------------


class ScanError(DomainException):
    """Base class for scan capture failures."""


class AlreadyScanningError(ScanError):
    """``start()`` was called while a capture session is active."""


class CameraUnavailableError(ScanError):
    """No capture device is available."""


class CaptureSetupError(ScanError):
    """The capture device could not be wired into a session."""


# --- Product lookup -----------------------------------------------------------


class LookupFailedError(DomainException):
    """Base class for every way a product lookup can fail."""


class MissingCredentialError(LookupFailedError):
    """No API key is configured."""


class NoPayloadError(LookupFailedError):
    """The response body contains no JSON object."""


class ParseError(LookupFailedError):
    """The JSON payload is malformed or carries no string ``title``."""


class NetworkError(LookupFailedError):
    """Transport failure, timeout or non-2xx response."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.status_code = status_code
