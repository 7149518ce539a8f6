"""Abstract key/value byte storage.

Defined in the domain layer so the core never depends on
infrastructure. Concrete implementations (files, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PersistencePort(ABC):

    @abstractmethod
    def read_bytes(self, key: str) -> bytes | None:
        """Return the bytes stored under ``key``, or None if nothing is saved."""

    @abstractmethod
    def write_bytes(self, key: str, data: bytes) -> None:
        """Replace whatever is stored under ``key`` with ``data``."""
