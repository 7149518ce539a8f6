"""Item entity: one line of household inventory.

Items are created by the entry workflow, stored exclusively by the
InventoryStore, and handed out to everyone else as independent copies.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from fridge.domain.exceptions import ValidationError

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_QUANTITY = 1
MAX_QUANTITY = 100


def new_item_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC; aware values are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Item:
    """A stored or drafted inventory item.

    Invariants (enforced by the store, not the dataclass):
    - ``id`` is unique within the store and never changes
    - ``quantity`` is >= 1 for every stored item

    The ``__init__`` is intentionally permissive so the store can
    reconstitute persisted items and drafts can hold work in progress.
    """

    id: str = field(default_factory=new_item_id)
    barcode: str = ""
    title: str = ""
    quantity: int = MIN_QUANTITY
    expiration_date: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        self.expiration_date = as_utc(self.expiration_date)

    @classmethod
    def create(cls, barcode: str = "", title: str = "") -> Item:
        """Factory for a brand-new item with a fresh id and default fields."""
        return cls(barcode=barcode.strip(), title=title)

    def copy(self) -> Item:
        """Return an independent copy that shares no mutable state."""
        return replace(self)

    def set_quantity(self, value: int) -> None:
        """Change the quantity while editing; limited to the editable range."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(value).__name__}"
            )
        if not MIN_QUANTITY <= value <= MAX_QUANTITY:
            raise ValidationError(
                f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}, got {value}"
            )
        self.quantity = value

    def consume(self, amount: int = 1) -> None:
        """Use up ``amount`` units. The quantity may reach zero or below."""
        if amount <= 0:
            raise ValidationError("Consume amount must be positive")
        self.quantity -= amount

    @property
    def is_depleted(self) -> bool:
        return self.quantity <= 0

    def matches(self, search_text: str) -> bool:
        """Case-insensitive substring match on the title."""
        if not search_text:
            return True
        return search_text.casefold() in self.title.casefold()
