"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
handing out references to the store's own items.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fridge.domain.model.item import Item


@dataclass(frozen=True)
class ItemDTO:
    """Output: a read-only snapshot of a stored item."""

    id: str
    barcode: str
    title: str
    quantity: int
    expiration_date: datetime

    @classmethod
    def from_item(cls, item: Item) -> ItemDTO:
        return cls(
            id=item.id,
            barcode=item.barcode,
            title=item.title,
            quantity=item.quantity,
            expiration_date=item.expiration_date,
        )
