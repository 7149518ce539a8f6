"""Unit tests for the Item entity."""

from datetime import datetime, timedelta, timezone

import pytest

from fridge.domain.exceptions import ValidationError
from fridge.domain.model.item import MAX_QUANTITY, MIN_QUANTITY, Item


class TestItemCreate:

    def test_defaults(self):
        before = datetime.now(timezone.utc)
        item = Item.create()
        assert item.barcode == ""
        assert item.title == ""
        assert item.quantity == 1
        assert before <= item.expiration_date <= datetime.now(timezone.utc)

    def test_ids_are_unique(self):
        ids = {Item.create().id for _ in range(50)}
        assert len(ids) == 50

    def test_barcode_is_trimmed(self):
        assert Item.create(barcode=" 4006381333931\n").barcode == "4006381333931"

    def test_naive_expiration_read_as_utc(self):
        item = Item(expiration_date=datetime(2026, 10, 5, 8, 30))
        assert item.expiration_date == datetime(2026, 10, 5, 8, 30, tzinfo=timezone.utc)

    def test_aware_expiration_kept(self):
        offset = timezone(timedelta(hours=2))
        item = Item(expiration_date=datetime(2026, 10, 5, tzinfo=offset))
        assert item.expiration_date.tzinfo is offset


class TestItemCopy:

    def test_copy_is_independent(self):
        item = Item.create(title="Eggs")
        clone = item.copy()
        clone.title = "Ham"
        clone.quantity = 5
        assert item.title == "Eggs"
        assert item.quantity == 1
        assert clone.id == item.id


class TestItemQuantity:

    @pytest.mark.parametrize("value", [MIN_QUANTITY, 42, MAX_QUANTITY])
    def test_set_quantity_in_range(self, value):
        item = Item.create()
        item.set_quantity(value)
        assert item.quantity == value

    @pytest.mark.parametrize("value", [0, -1, MAX_QUANTITY + 1])
    def test_set_quantity_out_of_range_rejected(self, value):
        item = Item.create()
        with pytest.raises(ValidationError, match="between"):
            item.set_quantity(value)
        assert item.quantity == 1

    def test_set_quantity_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            Item.create().set_quantity(2.5)

    def test_consume_can_deplete(self):
        item = Item(quantity=2)
        item.consume(2)
        assert item.quantity == 0
        assert item.is_depleted

    def test_consume_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Item(quantity=2).consume(0)


class TestItemMatches:

    def test_empty_search_matches_everything(self):
        assert Item(title="").matches("")
        assert Item(title="Whole Milk").matches("")

    def test_case_insensitive_substring(self):
        item = Item(title="Whole MILK")
        assert item.matches("milk")
        assert item.matches("ole m")
        assert not item.matches("cream")
