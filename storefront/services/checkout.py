"""
Checkout flow

Linear three-step state machine: shipping -> payment -> review, ending in
`place_order`. Form problems are reported through `errors`, never raised.
"""

import logging
from decimal import Decimal
from enum import IntEnum
from typing import Optional

from ..models.cart import MaterializedCartLine
from ..models.common import Notification, Redirect, Result, Severity
from ..models.forms import PaymentForm, ShippingForm
from ..models.order import Order, OrderItem, OrderRequest
from .cart_service import CartReconciliationService
from .cart_store import CartStore
from .order_service import OrderService

logger = logging.getLogger(__name__)

CART_PATH = "/cart"
CONFIRMATION_PATH = "/order-confirmation"


class CheckoutStep(IntEnum):
    SHIPPING = 0
    PAYMENT = 1
    REVIEW = 2


class CheckoutFlow:
    """State for one checkout session"""

    def __init__(
        self,
        cart_service: CartReconciliationService,
        cart_store: CartStore,
        order_service: OrderService,
        allow_sample_prices: bool = False,
    ):
        self.cart_service = cart_service
        self.cart_store = cart_store
        self.order_service = order_service
        self.allow_sample_prices = allow_sample_prices

        self.active_step = CheckoutStep.SHIPPING
        self.shipping = ShippingForm()
        self.payment = PaymentForm()
        self.errors: dict[str, str] = {}
        self.lines: list[MaterializedCartLine] = []
        self.total = Decimal("0")
        self.notification: Optional[Notification] = None
        self.redirect: Optional[Redirect] = None
        self.submitting = False

    async def start(self) -> Optional[Redirect]:
        """Load the cart; an empty cart sends the user back to the cart page"""
        result = await self.cart_service.materialize()
        lines = result.value or []
        self.notification = None

        if not lines:
            logger.info("Checkout opened with an empty cart")
            self.redirect = Redirect(CART_PATH)
            return self.redirect

        if not result.ok:
            self.notification = Notification(
                result.error or "Some cart items could not be refreshed",
                Severity.WARNING,
            )

        self.lines = lines
        self.total = self.cart_service.total(lines)
        return None

    # ==================== Steps ====================

    def _step_errors(self, step: CheckoutStep) -> dict[str, str]:
        if step == CheckoutStep.SHIPPING:
            return self.shipping.validate()
        if step == CheckoutStep.PAYMENT:
            return self.payment.validate()
        return {}

    def validate_step(self) -> bool:
        self.errors = self._step_errors(self.active_step)
        return not self.errors

    def next(self) -> bool:
        """Advance one step if the current step's fields are filled in"""
        if self.active_step == CheckoutStep.REVIEW:
            return False
        if not self.validate_step():
            return False
        self.active_step = CheckoutStep(self.active_step + 1)
        return True

    @property
    def can_go_back(self) -> bool:
        return self.active_step != CheckoutStep.SHIPPING

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self.errors = {}
        self.active_step = CheckoutStep(self.active_step - 1)
        return True

    # ==================== Submission ====================

    def build_order_request(self) -> OrderRequest:
        return OrderRequest(
            items=[
                OrderItem.model_validate(line.model_dump(include=set(OrderItem.model_fields)))
                for line in self.lines
            ],
            total=self.total,
            shipping=self.shipping.to_summary(),
            payment=self.payment.to_summary(),
        )

    def _pricing_problem(self) -> Optional[str]:
        if any(not line.resolved for line in self.lines):
            return "Some cart items could not be refreshed. Please reload the cart and try again."
        if not self.allow_sample_prices and any(line.is_mock for line in self.lines):
            return "Cart prices are sample data. Please reload the cart and try again."
        return None

    async def place_order(self) -> Result[Order]:
        """
        Submit the order from the review step.

        Every line must carry a current price; lines that could not be
        refreshed, or that are priced from sample data outside of mock mode,
        block submission.

        On success the cart is cleared and `redirect` points at the
        confirmation page. On failure everything is left as it was so the
        user can try again.
        """
        if self.active_step != CheckoutStep.REVIEW:
            return Result.failed("Orders can only be placed from the review step")
        if self.submitting:
            return Result.failed("Order is already being placed")

        errors = {**self._step_errors(CheckoutStep.SHIPPING), **self._step_errors(CheckoutStep.PAYMENT)}
        if errors:
            self.errors = errors
            return Result.failed("Please complete the required fields", field_errors=errors)
        if not self.lines:
            return Result.failed("Your cart is empty")

        problem = self._pricing_problem()
        if problem:
            logger.warning(f"Refusing to place order: {problem}")
            self.notification = Notification(problem, Severity.ERROR)
            return Result.failed(problem)

        self.submitting = True
        try:
            result = await self.order_service.submit(self.build_order_request())
        finally:
            self.submitting = False

        if result.is_failed or result.value is None:
            logger.error(f"Error placing order: {result.error}")
            self.notification = Notification(
                result.error or "Error placing order. Please try again.",
                Severity.ERROR,
            )
            return result

        order = result.value
        self.cart_store.clear()
        self.notification = Notification("Order placed successfully!", Severity.SUCCESS)
        self.redirect = Redirect(f"{CONFIRMATION_PATH}?orderId={order.id}")
        logger.info(f"Order {order.id} placed: {order.total} ({'mock' if order.is_mock else 'server'})")
        return result
