"""Composition root: wires concrete implementations to the ports.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import sys

from fridge.application.credentials import CredentialStore
from fridge.application.entry_orchestrator import EntryOrchestrator
from fridge.application.inventory_store import InventoryStore
from fridge.application.product_lookup import ProductLookupClient
from fridge.infrastructure.network.httpx_network import HttpxNetwork
from fridge.infrastructure.persistence.file_persistence import FilePersistence
from fridge.infrastructure.scanner.line_stream_scanner import LineStreamScanner
from fridge.infrastructure.settings import get_settings


def persistence() -> FilePersistence:
    return FilePersistence(get_settings().DATA_DIR)


def inventory_store() -> InventoryStore:
    store = InventoryStore(persistence())
    store.load()
    return store


def credential_store() -> CredentialStore:
    credentials = CredentialStore(persistence(), override=get_settings().API_KEY)
    credentials.load()
    return credentials


def lookup_client() -> ProductLookupClient:
    settings = get_settings()
    return ProductLookupClient(
        HttpxNetwork(timeout=settings.LOOKUP_TIMEOUT),
        base_url=settings.LOOKUP_BASE_URL,
    )


def entry_orchestrator(
    store: InventoryStore, credentials: CredentialStore
) -> EntryOrchestrator:
    return EntryOrchestrator(store, lookup_client(), credentials)


def scanner() -> LineStreamScanner:
    return LineStreamScanner(sys.stdin)
