"""InventoryStore: the single source of truth for all items.

The store keeps items in insertion order, persists the full collection
after every mutation and hands out copies only. Each mutation builds the
new collection, writes it, and only then swaps it in, so a failed write
never leaves a half-applied change behind.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from fridge.application.dto import ItemDTO
from fridge.domain.exceptions import (
    DuplicateIdError,
    PersistenceDecodeError,
    ValidationError,
)
from fridge.domain.model.item import MIN_QUANTITY, Item
from fridge.domain.ports.persistence_port import PersistencePort

logger = logging.getLogger(__name__)

ITEMS_KEY = "savedItems"


class InventoryStore:

    def __init__(self, persistence: PersistencePort, key: str = ITEMS_KEY) -> None:
        self._persistence = persistence
        self._key = key
        self._items: list[Item] = []

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self._index_of(item_id) is not None

    # --- Persistence ----------------------------------------------------------

    def load(self) -> None:
        """Restore the collection; missing or unreadable state means empty."""
        data = self._persistence.read_bytes(self._key)
        if data is None:
            logger.info("No saved inventory under %r, starting empty", self._key)
            self._items = []
            return
        try:
            self._items = self._decode(data)
        except PersistenceDecodeError as exc:
            logger.warning("Discarding unreadable inventory state: %s", exc)
            self._items = []
            return
        logger.info("Loaded %d item(s)", len(self._items))

    def save(self) -> None:
        self._write(self._items)

    # --- Mutations ------------------------------------------------------------

    def add(self, item: Item) -> None:
        if self._index_of(item.id) is not None:
            raise DuplicateIdError(f"Item {item.id} already exists")
        self._check_storable(item)
        self._commit([*self._items, item.copy()])

    def update(self, item: Item) -> None:
        """Replace the item with the same id, or append it if there is none."""
        self._check_storable(item)
        index = self._index_of(item.id)
        items = list(self._items)
        if index is None:
            items.append(item.copy())
        else:
            items[index] = item.copy()
        self._commit(items)

    def delete(self, item_id: str) -> None:
        index = self._index_of(item_id)
        if index is None:
            return
        items = list(self._items)
        del items[index]
        self._commit(items)

    def consume(self, item_id: str, amount: int = 1) -> None:
        """Use up ``amount`` units; the item disappears once none are left."""
        if amount < 1:
            raise ValidationError("Consume amount must be positive")
        index = self._index_of(item_id)
        if index is None:
            return
        items = list(self._items)
        consumed = items[index].copy()
        consumed.consume(amount)
        if consumed.is_depleted:
            del items[index]
        else:
            items[index] = consumed
        self._commit(items)

    # --- Queries --------------------------------------------------------------

    def get(self, item_id: str) -> Item | None:
        """Return an independent copy of the stored item, or None."""
        index = self._index_of(item_id)
        if index is None:
            return None
        return self._items[index].copy()

    def query(
        self, search_text: str = "", sort_by_expiration: bool = False
    ) -> tuple[ItemDTO, ...]:
        matches = [item for item in self._items if item.matches(search_text)]
        if sort_by_expiration:
            # sorted() is stable, so equal dates keep insertion order
            matches = sorted(matches, key=lambda item: item.expiration_date)
        return tuple(ItemDTO.from_item(item) for item in matches)

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, item_id: object) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    @staticmethod
    def _check_storable(item: Item) -> None:
        if item.quantity < MIN_QUANTITY:
            raise ValidationError(
                f"Cannot store '{item.title or item.id}' with quantity {item.quantity}"
            )

    def _commit(self, items: list[Item]) -> None:
        self._write(items)
        self._items = items

    def _write(self, items: list[Item]) -> None:
        raw = [self._to_raw(item) for item in items]
        self._persistence.write_bytes(
            self._key, (json.dumps(raw, indent=2) + "\n").encode("utf-8")
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "barcode": item.barcode,
            "title": item.title,
            "quantity": item.quantity,
            "expirationDate": item.expiration_date.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        if not isinstance(raw, dict):
            raise PersistenceDecodeError(f"Expected an object, got {type(raw).__name__}")
        try:
            item_id = raw["id"]
            barcode = raw["barcode"]
            title = raw["title"]
            quantity = raw["quantity"]
            expiration = datetime.fromisoformat(raw["expirationDate"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceDecodeError(f"Malformed item record: {exc!r}") from exc

        if not all(isinstance(v, str) for v in (item_id, barcode, title)):
            raise PersistenceDecodeError(f"Malformed text fields in item {item_id!r}")
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise PersistenceDecodeError(f"Malformed quantity in item {item_id!r}")
        if quantity < MIN_QUANTITY:
            raise PersistenceDecodeError(f"Non-positive quantity in item {item_id!r}")
        return Item(
            id=item_id,
            barcode=barcode,
            title=title,
            quantity=quantity,
            expiration_date=expiration,
        )

    @classmethod
    def _decode(cls, data: bytes) -> list[Item]:
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            raise PersistenceDecodeError(f"Invalid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise PersistenceDecodeError(f"Expected a list, got {type(raw).__name__}")

        items = [cls._to_domain(record) for record in raw]
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise PersistenceDecodeError("Duplicate item ids")
        return items
