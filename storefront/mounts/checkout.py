"""
Checkout mount: order summary with quantity controls and order submission.

Totals are derived from the view model's current cart on every access.
Submission validates locally first, then holds the submission guard for
the whole remote call; every outcome ends in a notification.
"""
import asyncio
from decimal import Decimal
from typing import Callable, Optional, Union

from storefront.api import StorefrontAPI, describe_submission_error
from storefront.bus import BroadcastBus
from storefront.cart import Cart, PersistentCartStore
from storefront.checkout import SHIPPING_FEE, CheckoutTotals, compute_totals
from storefront.config import VALIDATION_NOTIFICATION_MS
from storefront.errors import ERROR_SERVER_PROBLEM, CartPositionError, SubmissionInProgress
from storefront.forms import BillingDetails, OrderRequest
from storefront.guard import SubmissionGuard
from storefront.logging import get_logger

from .base import CartMount, Render

logger = get_logger(__name__)

ITEM_REMOVED = "Item removed from cart"
ORDER_PLACED = (
    "🎉 Order placed successfully! Thank you {name}! "
    "Your order will be processed and delivered soon."
)


class CheckoutMount(CartMount):
    name = "checkout"

    def __init__(
        self,
        store: PersistentCartStore,
        bus: BroadcastBus,
        api: StorefrontAPI,
        render: Optional[Render] = None,
        shipping: Union[str, int, Decimal] = SHIPPING_FEE,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(store, bus, render, loop)
        self.api = api
        self.shipping = shipping
        self.billing = BillingDetails()
        self.guard = SubmissionGuard(on_change=lambda _: self._changed())

    @property
    def totals(self) -> CheckoutTotals:
        return compute_totals(self.cart, self.shipping)

    @property
    def is_loading(self) -> bool:
        return self.guard.submitting

    # Quantity controls are disabled while an order is in flight

    def remove(self, position: int) -> Cart:
        if self.is_loading:
            return self.cart
        cart = self._apply(self.cart_vm.remove_line, position)
        if cart is not None:
            self.notifications.show_success(ITEM_REMOVED, 2000)
        return self.cart

    def increase(self, position: int) -> Cart:
        if self.is_loading:
            return self.cart
        self._apply(self.cart_vm.increase_quantity, position)
        return self.cart

    def decrease(self, position: int) -> Cart:
        """Decrement; dropping below 1 removes the line like ``remove``."""
        if self.is_loading:
            return self.cart
        cart = self.cart_vm.refresh()
        if 0 <= position < len(cart) and cart[position].quantity <= 1:
            return self.remove(position)
        self._apply(self.cart_vm.decrease_quantity, position)
        return self.cart

    def _apply(self, operation: Callable[[int], Cart], position: int) -> Optional[Cart]:
        """Run a quantity control; a position left over from an older render is dropped."""
        try:
            return operation(position)
        except CartPositionError as e:
            logger.warning(f"Ignoring stale cart position on {self.name}: {e}")
            self.cart_vm.refresh()
            return None

    async def submit_order(self) -> bool:
        """
        Validate and submit the order.

        Returns:
            True if the order was accepted, False otherwise
        """
        if self.guard.submitting:
            logger.info("Order submission ignored: already in progress")
            return False

        cart = self.cart_vm.refresh()
        issue = self.billing.validate_for(cart)
        if issue is not None:
            self.notifications.enqueue(issue.message, issue.kind, VALIDATION_NOTIFICATION_MS)
            return False

        payload = OrderRequest.build(self.billing, cart).to_payload()
        try:
            with self.guard.hold():
                return await self._send_order(payload)
        except SubmissionInProgress:
            logger.info("Order submission ignored: already in progress")
            return False

    async def _send_order(self, payload: dict) -> bool:
        try:
            response = await self.api.submit_order(payload)
        except Exception as e:
            logger.error(f"Order submission failed: {e}", exc_info=True)
            self.notifications.show_error(describe_submission_error(e), VALIDATION_NOTIFICATION_MS)
            return False

        if response.status_code != 200:
            logger.error(f"Order submission returned status {response.status_code}")
            self.notifications.show_error(ERROR_SERVER_PROBLEM, VALIDATION_NOTIFICATION_MS)
            return False

        name = self.billing.full_name
        self.billing.reset()
        # Empty cart is written and broadcast so every other mount drops its copy
        self.cart_vm.clear()
        logger.info(f"Order placed with {len(payload['cart'])} line(s)")
        self.notifications.show_success(ORDER_PLACED.format(name=name), 6000)
        return True
