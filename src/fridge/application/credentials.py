"""CredentialStore: lifecycle of the lookup service API key.

Absent on first run, prompted from the user, persisted, and loaded on
every later start. A key supplied through configuration wins over the
persisted one and is never written back.
"""

from __future__ import annotations

import logging

from fridge.domain.exceptions import ValidationError
from fridge.domain.ports.persistence_port import PersistencePort

logger = logging.getLogger(__name__)

API_KEY_KEY = "userApiKey"


class CredentialStore:

    def __init__(
        self,
        persistence: PersistencePort,
        override: str | None = None,
        key: str = API_KEY_KEY,
    ) -> None:
        self._persistence = persistence
        self._override = override.strip() if override else None
        self._key = key
        self._api_key: str | None = None

    @property
    def api_key(self) -> str | None:
        if self._override:
            return self._override
        return self._api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def load(self) -> str | None:
        data = self._persistence.read_bytes(self._key)
        if data is None:
            self._api_key = None
        else:
            try:
                self._api_key = data.decode("utf-8").strip() or None
            except UnicodeDecodeError:
                logger.warning("Ignoring undecodable API key under %r", self._key)
                self._api_key = None
        return self.api_key

    def save(self, api_key: str) -> None:
        api_key = api_key.strip()
        if not api_key:
            raise ValidationError("API key must not be empty")
        self._persistence.write_bytes(self._key, api_key.encode("utf-8"))
        self._api_key = api_key
        logger.info("API key saved")
