"""
Unit tests for CartStore and FileCartStorage.

Carts are persisted as a JSON array under the "rsCart" key; a plain dict
stands in for the session in most tests.
"""

import json
import pytest
from decimal import Decimal
from unittest.mock import patch

from core.quantity import is_valid_quantity
from services.cart_store import CartStore, FileCartStorage


@pytest.fixture
def storage():
    return {}


@pytest.fixture
def store(storage):
    return CartStore(storage)


class TestAddItem:

    def test_add_new_product_defaults_to_moq(self, store, raw_cashews):
        cart = store.add_item(raw_cashews)

        assert len(cart) == 1
        line = cart.get("raw-w320")
        assert line.quantity == 25
        assert line.name == "Raw Cashews W320"
        assert line.price == Decimal("1200.00")
        assert line.image == "/images/products/raw-w320/1.png"

    def test_add_rounds_requested_quantity(self, store, raw_cashews):
        cart = store.add_item(raw_cashews, 10)
        assert cart.get("raw-w320").quantity == 25

        store.clear()
        cart = store.add_item(raw_cashews, 42)
        assert cart.get("raw-w320").quantity == 40

    def test_add_same_product_twice_merges_lines(self, store, raw_cashews):
        # The requested amount is added to the line, then the sum is rounded:
        # 25 + 10 = 35, which is already a valid quantity.
        store.add_item(raw_cashews, 25)
        cart = store.add_item(raw_cashews, 10)

        assert len(cart) == 1
        assert cart.get("raw-w320").quantity == 35

    @pytest.mark.parametrize("amount", [-1000, -5, 0])
    def test_non_positive_amount_never_shrinks_line(self, store, storage, raw_cashews, amount):
        store.add_item(raw_cashews, 250)

        cart = store.add_item(raw_cashews, amount)

        # Falls back to adding the MOQ
        assert cart.get("raw-w320").quantity == 275
        assert json.loads(storage["rsCart"])[0]["quantity"] == 275

    def test_merge_keeps_original_price_snapshot(self, store, raw_cashews):
        store.add_item(raw_cashews, 25)
        repriced = raw_cashews.model_copy(update={"price": Decimal("999.00")})

        cart = store.add_item(repriced, 25)

        assert cart.get("raw-w320").price == Decimal("1200.00")
        assert cart.get("raw-w320").quantity == 50

    def test_image_falls_back_to_first_gallery_image(self, store, roasted_cashews):
        cart = store.add_item(roasted_cashews)
        assert cart.get("roasted-salted").image == "/images/products/roasted-w240/1.png"

    def test_lines_keep_insertion_order(self, store, raw_cashews, roasted_cashews):
        store.add_item(roasted_cashews)
        store.add_item(raw_cashews)
        assert [line.id for line in store.lines] == ["roasted-salted", "raw-w320"]


class TestTotals:

    def test_totals(self, store, raw_cashews, roasted_cashews):
        store.add_item(raw_cashews, 25)
        store.add_item(roasted_cashews, 30)

        assert store.total_items == 55
        assert store.total_price == Decimal("1200.00") * 25 + Decimal("1400.00") * 30

    def test_empty_cart_totals(self, store):
        assert store.total_items == 0
        assert store.total_price == Decimal("0")
        assert store.snapshot().is_empty

    def test_snapshot_is_detached(self, store, raw_cashews):
        store.add_item(raw_cashews)
        snapshot = store.snapshot()
        snapshot.lines[0].quantity = 999

        assert store.get("raw-w320").quantity == 25


class TestUpdateQuantity:

    def test_update_rounds(self, store, raw_cashews):
        store.add_item(raw_cashews)
        cart = store.update_quantity("raw-w320", 48)
        assert cart.get("raw-w320").quantity == 50

    def test_update_below_moq_removes_line(self, store, raw_cashews):
        store.add_item(raw_cashews)
        cart = store.update_quantity("raw-w320", 10)

        assert "raw-w320" not in cart
        assert cart.is_empty

    def test_update_non_numeric_removes_line(self, store, raw_cashews):
        store.add_item(raw_cashews)
        cart = store.update_quantity("raw-w320", None)
        assert "raw-w320" not in cart

    def test_update_absent_product_is_noop(self, store, storage, raw_cashews):
        store.add_item(raw_cashews)
        before = storage["rsCart"]

        cart = store.update_quantity("missing", 50)

        assert len(cart) == 1
        assert storage["rsCart"] == before


class TestStepQuantity:

    def test_step_up_and_down(self, store, raw_cashews):
        store.add_item(raw_cashews)

        assert store.step_quantity("raw-w320", 1).get("raw-w320").quantity == 30
        assert store.step_quantity("raw-w320", -1).get("raw-w320").quantity == 25

    def test_step_down_at_moq_keeps_line(self, store, raw_cashews):
        store.add_item(raw_cashews)
        cart = store.step_quantity("raw-w320", -1)
        assert cart.get("raw-w320").quantity == 25

    def test_invalid_direction_raises(self, store, raw_cashews):
        store.add_item(raw_cashews)
        with pytest.raises(ValueError):
            store.step_quantity("raw-w320", 0)

    def test_invalid_direction_raises_for_absent_product(self, store):
        with pytest.raises(ValueError):
            store.step_quantity("missing", 3)


class TestRemoveAndClear:

    def test_remove(self, store, raw_cashews, roasted_cashews):
        store.add_item(raw_cashews)
        store.add_item(roasted_cashews)

        cart = store.remove_item("raw-w320")

        assert [line.id for line in cart.lines] == ["roasted-salted"]

    def test_remove_absent_is_noop(self, store):
        assert store.remove_item("missing").is_empty

    def test_clear_persists_empty_cart(self, store, storage, raw_cashews):
        store.add_item(raw_cashews)
        store.clear()

        assert json.loads(storage["rsCart"]) == []
        assert CartStore(storage).snapshot().is_empty


class TestPersistence:

    def test_every_mutation_is_saved(self, store, storage, raw_cashews):
        store.add_item(raw_cashews)

        saved = json.loads(storage["rsCart"])
        assert saved == [{
            "id": "raw-w320",
            "name": "Raw Cashews W320",
            "price": "1200.00",
            "image": "/images/products/raw-w320/1.png",
            "quantity": 25,
        }]

    def test_round_trip_two_lines(self, store, storage, raw_cashews, roasted_cashews):
        store.add_item(raw_cashews, 40)
        store.add_item(roasted_cashews, 25)

        reloaded = CartStore(storage)

        assert [(l.id, l.quantity, l.price) for l in reloaded.lines] == [
            ("raw-w320", 40, Decimal("1200.00")),
            ("roasted-salted", 25, Decimal("1400.00")),
        ]

    def test_custom_storage_key(self, storage, raw_cashews):
        store = CartStore(storage, storage_key="otherCart")
        store.add_item(raw_cashews)

        assert "otherCart" in storage
        assert "rsCart" not in storage

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"id": "raw-w320"}',
        '[{"name": "no id"}]',
        '[{"id": "raw-w320", "price": "abc", "quantity": 25}]',
        '[{"id": "raw-w320", "price": "1200", "quantity": "25"}]',
    ])
    def test_malformed_data_gives_empty_cart(self, raw):
        with patch("services.cart_store.logger") as mock_logger:
            store = CartStore({"rsCart": raw})

        assert store.snapshot().is_empty
        mock_logger.error.assert_called_once()
        assert "Failed to parse saved cart" in mock_logger.error.call_args[0][0]

    def test_invalid_stored_quantity_is_normalized(self):
        raw = json.dumps([
            {"id": "raw-w320", "name": "Raw", "price": "1200", "image": "", "quantity": 12},
            {"id": "organic", "name": "Organic", "price": "1600", "image": "", "quantity": 33},
        ])
        store = CartStore({"rsCart": raw})

        quantities = {line.id: line.quantity for line in store.lines}
        assert quantities == {"raw-w320": 25, "organic": 35}
        assert all(is_valid_quantity(q) for q in quantities.values())


class TestFileCartStorage:

    def test_round_trip_through_file(self, tmp_path, raw_cashews, roasted_cashews):
        path = tmp_path / "cart.json"
        store = CartStore(FileCartStorage(path))
        store.add_item(raw_cashews, 30)
        store.add_item(roasted_cashews)

        reloaded = CartStore(FileCartStorage(path))

        assert [(l.id, l.quantity) for l in reloaded.lines] == [
            ("raw-w320", 30),
            ("roasted-salted", 25),
        ]

    def test_missing_file_reads_empty(self, tmp_path):
        storage = FileCartStorage(tmp_path / "nope.json")
        assert len(storage) == 0
        assert storage.get("rsCart") is None

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "cart.json"
        path.write_text("{broken", encoding="utf-8")

        assert CartStore(FileCartStorage(path)).snapshot().is_empty

    def test_delete_key(self, tmp_path):
        storage = FileCartStorage(tmp_path / "cart.json")
        storage["a"] = "1"
        storage["b"] = "2"
        del storage["a"]

        assert dict(storage) == {"b": "2"}
