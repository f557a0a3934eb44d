"""Checkout totals: subtotal, fixed shipping, and grand total."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from storefront.cart.models import Cart
from storefront.config import STOREFRONT_CURRENCY, STOREFRONT_SHIPPING_FEE
from storefront.money import format_money, round_money, to_decimal

SHIPPING_FEE = round_money(STOREFRONT_SHIPPING_FEE)


@dataclass(frozen=True)
class CheckoutTotals:
    subtotal: Decimal
    shipping: Decimal
    total: Decimal

    def formatted(self, currency: str = STOREFRONT_CURRENCY) -> dict:
        """Display strings, e.g. {"subtotal": "200.00 L.E", ...}."""
        return {
            "subtotal": format_money(self.subtotal, currency),
            "shipping": format_money(self.shipping, currency),
            "total": format_money(self.total, currency),
        }


def compute_totals(cart: Cart, shipping: Union[str, int, Decimal] = SHIPPING_FEE) -> CheckoutTotals:
    """
    Derive checkout totals from a cart.

    Pure function of its input; callers recompute on every cart change.
    An empty cart yields subtotal 0 and total equal to shipping.
    """
    subtotal = cart.subtotal
    shipping_fee = round_money(to_decimal(shipping))
    return CheckoutTotals(
        subtotal=subtotal,
        shipping=shipping_fee,
        total=round_money(subtotal + shipping_fee),
    )
