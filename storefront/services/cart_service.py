"""Cart reconciliation: persisted lines joined with current product data"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Protocol

from ..models.cart import CartLine, MaterializedCartLine
from ..models.common import Identifier, Result
from ..models.product import Product
from .cart_store import CartStore

logger = logging.getLogger(__name__)


class ProductLookup(Protocol):
    async def get_product(self, product_id: Identifier) -> Result[Product]: ...


class CartReconciliationService:
    """
    Builds the current cart view; never caches prices between reads.

    Sample product data from a lookup fallback is only trusted when
    `accept_sample_data` is set (mock API forced on). Otherwise such a line
    is treated like a failed lookup.
    """

    def __init__(
        self,
        cart_store: CartStore,
        product_lookup: ProductLookup,
        accept_sample_data: bool = False,
    ):
        self.cart_store = cart_store
        self.product_lookup = product_lookup
        self.accept_sample_data = accept_sample_data

    async def _resolve(self, line: CartLine) -> tuple[MaterializedCartLine, bool]:
        """Returns the line and whether it came from real product data"""
        try:
            result = await self.product_lookup.get_product(line.id)
        except Exception:
            logger.exception(f"Error fetching product {line.id}")
            return MaterializedCartLine.unresolved(line), False

        if result.is_failed or result.value is None:
            logger.warning(f"Error fetching product {line.id}: {result.error}")
            return MaterializedCartLine.unresolved(line), False

        if result.is_degraded:
            if not self.accept_sample_data:
                logger.warning(f"Discarding sample data for product {line.id}: {result.error}")
                return MaterializedCartLine.unresolved(line), False
            return MaterializedCartLine.from_product(result.value, line.quantity, is_mock=True), False

        return MaterializedCartLine.from_product(result.value, line.quantity), True

    async def materialize(self) -> Result[list[MaterializedCartLine]]:
        """
        Current cart lines with product fields filled in.

        Lookups run concurrently but the output keeps the persisted order.
        A failed lookup degrades only its own line.
        """
        stored = self.cart_store.lines()
        lines = stored.value or []
        if not lines:
            if stored.usable:
                return Result(stored.outcome, [], stored.error)
            return Result.degraded([], stored.error)

        resolved = await asyncio.gather(*(self._resolve(line) for line in lines))
        items = [item for item, _ in resolved]

        if stored.ok and all(real for _, real in resolved):
            return Result.success(items)

        missing = sum(1 for item in items if not item.resolved)
        if missing:
            error = f"{missing} cart item(s) could not be refreshed"
        else:
            error = stored.error or "Some product data is sample data"
        return Result.degraded(items, error)

    @staticmethod
    def total(lines: Iterable[MaterializedCartLine]) -> Decimal:
        """Sum of price * quantity; lines without a usable price count as zero"""
        total = Decimal("0")
        for line in lines:
            price = line.price
            if price is None:
                continue
            try:
                price = Decimal(price)
            except (InvalidOperation, TypeError, ValueError):
                logger.warning(f"Ignoring non-numeric price for product {line.id}: {price!r}")
                continue
            if not price.is_finite():
                continue
            total += price * line.quantity
        return total
