import json
import random

import pytest

from storefront.core.storage import FileStorage, MemoryStorage
from storefront.models.common import Outcome
from storefront.services.cart_store import CartStore

from .conftest import BrokenStorage


def stored(storage, key="cart"):
    return json.loads(storage.get_item(key))


class TestAddAndRemove:
    def test_add_creates_line(self, storage):
        cart = CartStore(storage)
        result = cart.add(1)

        assert result.ok
        assert stored(storage) == [{"id": 1, "quantity": 1}]

    def test_add_increments_existing_line(self, storage):
        cart = CartStore(storage)
        cart.add(1, 2)
        cart.add(1, 3)

        assert stored(storage) == [{"id": 1, "quantity": 5}]
        assert cart.count() == 5

    def test_add_keeps_one_line_per_product(self, storage):
        cart = CartStore(storage)
        cart.add(1)
        cart.add("sku-9", 2)
        cart.add(1)

        ids = [line["id"] for line in stored(storage)]
        assert ids == [1, "sku-9"]

    def test_remove_deletes_line(self, storage):
        cart = CartStore(storage)
        cart.add(1)
        cart.add(2)
        cart.remove(1)

        assert stored(storage) == [{"id": 2, "quantity": 1}]

    def test_remove_missing_is_noop(self, storage):
        cart = CartStore(storage)
        cart.add(1)

        assert cart.remove(42).ok
        assert cart.count() == 1

    def test_clear_removes_key(self, storage):
        cart = CartStore(storage)
        cart.add(1, 4)
        cart.clear()

        assert storage.get_item("cart") is None
        assert cart.count() == 0


class TestSetQuantity:
    def test_overwrites_quantity(self, storage):
        cart = CartStore(storage)
        cart.add(1, 2)
        cart.set_quantity(1, 7)

        assert stored(storage) == [{"id": 1, "quantity": 7}]

    def test_zero_and_negative_are_ignored(self, storage):
        cart = CartStore(storage)
        cart.add(1, 2)
        before = storage.get_item("cart")

        cart.set_quantity(1, 0)
        cart.set_quantity(1, -1)

        assert storage.get_item("cart") == before
        assert cart.count() == 2

    @pytest.mark.parametrize("quantity", [1.5, 2.0, "3", True, None])
    def test_non_integer_quantities_are_ignored(self, storage, quantity):
        cart = CartStore(storage)
        cart.add(1, 2)
        before = storage.get_item("cart")

        cart.add(1, quantity)
        cart.set_quantity(1, quantity)
        cart.add(2, quantity)

        assert storage.get_item("cart") == before
        assert cart.count() == 2
        assert cart.lines().ok

    def test_unknown_product_is_noop(self, storage):
        cart = CartStore(storage)
        cart.add(1)
        cart.set_quantity(99, 3)

        assert stored(storage) == [{"id": 1, "quantity": 1}]


class TestReadFailures:
    def test_missing_key_is_empty_cart(self, storage):
        result = CartStore(storage).lines()

        assert result.outcome == Outcome.SUCCESS
        assert result.value == []

    def test_corrupt_json_reads_as_empty(self):
        storage = MemoryStorage({"cart": "{not json"})
        cart = CartStore(storage)

        assert cart.count() == 0
        assert cart.lines().outcome == Outcome.DEGRADED

    def test_invalid_entries_are_dropped(self):
        storage = MemoryStorage({"cart": json.dumps([
            {"id": 1, "quantity": 2},
            {"id": 2, "quantity": 0},
            {"quantity": 3},
        ])})
        result = CartStore(storage).lines()

        assert result.is_degraded
        assert [(line.id, line.quantity) for line in result.value] == [(1, 2)]

    def test_add_after_corruption_starts_fresh(self):
        storage = MemoryStorage({"cart": "garbage"})
        cart = CartStore(storage)
        cart.add(3)

        assert stored(storage) == [{"id": 3, "quantity": 1}]

    def test_write_failure_does_not_raise(self):
        cart = CartStore(BrokenStorage())

        result = cart.add(1)

        assert result.is_failed
        assert cart.count() == 0
        assert cart.clear().is_failed


class TestSubscriptions:
    def test_listeners_receive_count(self, storage):
        cart = CartStore(storage)
        seen = []
        cart.subscribe(seen.append)

        cart.add(1, 2)
        cart.add(2)
        cart.set_quantity(1, 5)
        cart.remove(2)
        cart.clear()

        assert seen == [2, 3, 6, 5, 0]

    def test_ignored_updates_do_not_notify(self, storage):
        cart = CartStore(storage)
        cart.add(1)
        seen = []
        cart.subscribe(seen.append)

        cart.set_quantity(1, 0)
        cart.remove(99)

        assert seen == []

    def test_unsubscribe(self, storage):
        cart = CartStore(storage)
        seen = []
        unsubscribe = cart.subscribe(seen.append)
        cart.add(1)
        unsubscribe()
        cart.add(1)

        assert seen == [1]

    def test_failing_listener_does_not_block_others(self, storage):
        cart = CartStore(storage)
        seen = []

        def broken(count):
            raise RuntimeError("boom")

        cart.subscribe(broken)
        cart.subscribe(seen.append)
        result = cart.add(1)

        assert result.ok
        assert seen == [1]


def test_random_operations_keep_quantities_positive(storage):
    rng = random.Random(1234)
    cart = CartStore(storage)
    for _ in range(500):
        product_id = rng.randint(1, 6)
        op = rng.choice(["add", "remove", "set"])
        if op == "add":
            cart.add(product_id, rng.randint(1, 3))
        elif op == "remove":
            cart.remove(product_id)
        else:
            cart.set_quantity(product_id, rng.randint(-2, 5))

        lines = stored(storage) if storage.get_item("cart") else []
        assert all(line["quantity"] >= 1 for line in lines)
        assert len({line["id"] for line in lines}) == len(lines)
        assert cart.count() == sum(line["quantity"] for line in lines)


def test_file_storage_survives_restart(tmp_path):
    CartStore(FileStorage(str(tmp_path))).add("abc", 2)

    reopened = CartStore(FileStorage(str(tmp_path)))

    assert reopened.count() == 2
    assert reopened.lines().value[0].id == "abc"
