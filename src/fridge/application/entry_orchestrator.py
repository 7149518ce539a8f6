"""Application service: turn a scan or a manual-entry request into an item.

Every entry flow works on a Draft, an independent copy of an Item that
the store knows nothing about until it is committed. A scan also starts
a product lookup as an asyncio task on the running loop; the task fills
in the draft title when it finishes, unless the draft has been closed or
the user already typed a title. Lookup failures never interrupt the
entry flow.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from fridge.application.credentials import CredentialStore
from fridge.application.dto import ItemDTO
from fridge.application.inventory_store import InventoryStore
from fridge.application.product_lookup import ProductLookupClient
from fridge.domain.exceptions import LookupFailedError, ValidationError
from fridge.domain.model.item import MAX_QUANTITY, MIN_QUANTITY, Item

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Draft:
    """An item being edited, plus the state of its title lookup."""

    item: Item
    lookup: asyncio.Task[str | None] | None = None
    lookup_error: LookupFailedError | None = None
    closed: bool = False

    @property
    def lookup_pending(self) -> bool:
        return self.lookup is not None and not self.lookup.done()


class EntryOrchestrator:

    def __init__(
        self,
        store: InventoryStore,
        lookup_client: ProductLookupClient,
        credentials: CredentialStore,
    ) -> None:
        self._store = store
        self._lookup_client = lookup_client
        self._credentials = credentials

    def begin_manual_entry(self) -> Draft:
        return Draft(item=Item.create())

    def begin_edit(self, item_id: str) -> Draft | None:
        """Start editing a stored item; None if it no longer exists."""
        item = self._store.get(item_id)
        if item is None:
            return None
        return Draft(item=item)

    def begin_from_scan(self, barcode: str) -> Draft:
        """Draft an item for ``barcode`` and look up its title in the background.

        Must be called while an asyncio event loop is running.
        """
        draft = Draft(item=Item.create(barcode=barcode))
        loop = asyncio.get_running_loop()
        draft.lookup = loop.create_task(self._resolve_title(draft))
        return draft

    async def wait_for_lookup(self, draft: Draft) -> str:
        """Wait for a pending lookup, then return the draft title."""
        if draft.lookup is not None:
            await draft.lookup
        return draft.item.title

    def commit(self, draft: Draft) -> ItemDTO:
        """Store the draft as a new item or over the item with the same id."""
        if draft.closed:
            raise ValidationError("Draft has already been committed or discarded")
        quantity = draft.item.quantity
        if not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
            raise ValidationError(
                f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}, got {quantity}"
            )

        self._store.update(draft.item)
        draft.closed = True
        logger.info("Committed item %s (%r)", draft.item.id, draft.item.title)
        return ItemDTO.from_item(draft.item)

    def discard(self, draft: Draft) -> None:
        draft.closed = True

    # --- Lookup ---------------------------------------------------------------

    async def _resolve_title(self, draft: Draft) -> str | None:
        barcode = draft.item.barcode
        try:
            title = await self._lookup_client.lookup(barcode, self._credentials.api_key)
        except LookupFailedError as exc:
            logger.warning("Lookup for %s failed, title left empty: %s", barcode, exc)
            draft.lookup_error = exc
            return None

        if draft.closed:
            logger.info("Dropping lookup result for closed draft %s", draft.item.id)
        elif draft.item.title:
            logger.info("Keeping user-entered title for draft %s", draft.item.id)
        else:
            draft.item.title = title
        return title
