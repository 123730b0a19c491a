"""
Persisted cart store

Holds only product identity and quantity under a single storage key:

    [{"id": 1, "quantity": 2}, {"id": "sku-9", "quantity": 1}]

Nothing here raises to the caller. Storage failures are logged and reported
through the returned `Result`.
"""

import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..core.errors import StorageError
from ..core.storage import KeyValueStorage
from ..models.cart import CartLine
from ..models.common import Identifier, Result

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"

CountListener = Callable[[int], None]


def _valid_quantity(quantity: object) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


class CartStore:
    """Cart lines persisted in key-value storage, with change notifications"""

    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._listeners: list[CountListener] = []

    # ==================== Subscriptions ====================

    def subscribe(self, listener: CountListener) -> Callable[[], None]:
        """Register for item-count changes; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, lines: list[CartLine]) -> None:
        count = sum(line.quantity for line in lines)
        for listener in list(self._listeners):
            try:
                listener(count)
            except Exception:
                logger.exception("Cart listener failed")

    # ==================== Reads ====================

    def lines(self) -> Result[list[CartLine]]:
        """
        Read persisted lines.

        A missing key is an empty cart. Unparseable contents are also read as
        an empty cart but tagged degraded; unreadable storage is a failure.
        """
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.error(f"Error getting cart items from storage: {e}")
            return Result.failed("Cart storage unavailable", [])

        if not raw:
            return Result.success([])

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(f"Error parsing stored cart: {e}")
            return Result.degraded([], "Stored cart could not be read")

        if not isinstance(data, list):
            logger.error(f"Stored cart is not a list: {type(data).__name__}")
            return Result.degraded([], "Stored cart could not be read")

        lines: list[CartLine] = []
        skipped = 0
        for entry in data:
            try:
                line = CartLine.model_validate(entry)
            except ValidationError:
                skipped += 1
                continue
            if any(existing.id == line.id for existing in lines):
                skipped += 1
                continue
            lines.append(line)

        if skipped:
            logger.warning(f"Dropped {skipped} invalid cart entries")
            return Result.degraded(lines, "Some cart entries were invalid")
        return Result.success(lines)

    def count(self) -> int:
        """Total number of units in the cart, 0 when the cart cannot be read"""
        return sum(line.quantity for line in self.lines().value or [])

    # ==================== Mutations ====================

    def _write(self, lines: list[CartLine]) -> Result[list[CartLine]]:
        payload = json.dumps([line.to_wire() for line in lines])
        try:
            self.storage.set_item(self.key, payload)
        except StorageError as e:
            logger.error(f"Error saving cart: {e}")
            return Result.failed("Cart could not be saved")
        self._notify(lines)
        return Result.success(lines)

    def _current(self, action: str) -> Optional[list[CartLine]]:
        result = self.lines()
        if result.is_failed:
            logger.error(f"Error {action}: {result.error}")
            return None
        return result.value

    def add(self, product_id: Identifier, quantity: int = 1) -> Result[list[CartLine]]:
        """Add units of a product, creating the line if needed"""
        lines = self._current("adding to cart")
        if lines is None:
            return Result.failed("Cart storage unavailable")
        if not _valid_quantity(quantity):
            logger.debug(f"Ignoring add of {quantity!r} for product {product_id}")
            return Result.success(lines)

        existing = next((line for line in lines if line.id == product_id), None)
        if existing:
            existing.quantity += quantity
        else:
            lines.append(CartLine(id=product_id, quantity=quantity))

        return self._write(lines)

    def remove(self, product_id: Identifier) -> Result[list[CartLine]]:
        """Remove a product's line; absent products are a no-op"""
        lines = self._current("removing from cart")
        if lines is None:
            return Result.failed("Cart storage unavailable")

        remaining = [line for line in lines if line.id != product_id]
        if len(remaining) == len(lines):
            return Result.success(lines)
        return self._write(remaining)

    def set_quantity(self, product_id: Identifier, quantity: int) -> Result[list[CartLine]]:
        """
        Overwrite a line's quantity.

        Quantities that are not whole numbers of at least 1 are ignored
        outright; removal is `remove`.
        """
        lines = self._current("updating cart item quantity")
        if lines is None:
            return Result.failed("Cart storage unavailable")
        if not _valid_quantity(quantity):
            logger.debug(f"Ignoring quantity {quantity!r} for product {product_id}")
            return Result.success(lines)

        item = next((line for line in lines if line.id == product_id), None)
        if item is None:
            return Result.success(lines)

        item.quantity = quantity
        return self._write(lines)

    def clear(self) -> Result[list[CartLine]]:
        """Delete the whole persisted cart"""
        try:
            self.storage.remove_item(self.key)
        except StorageError as e:
            logger.error(f"Error clearing cart: {e}")
            return Result.failed("Cart could not be cleared")
        self._notify([])
        return Result.success([])
