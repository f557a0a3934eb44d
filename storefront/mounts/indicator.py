"""Cart indicator: the line counter in the navigation bar."""
from typing import Optional

from .base import CartMount


class CartIndicatorMount(CartMount):
    name = "cart-indicator"

    @property
    def count(self) -> int:
        return self.cart_vm.count

    @property
    def badge(self) -> Optional[str]:
        """Counter text, or None when the badge is hidden (empty cart)."""
        count = self.count
        return str(count) if count > 0 else None
