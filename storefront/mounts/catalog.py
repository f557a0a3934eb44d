"""Catalog mount: product list plus "add to cart" and "buy now"."""
import asyncio
from typing import Any, Dict, List, Optional

import httpx

from storefront.api import StorefrontAPI
from storefront.bus import BroadcastBus
from storefront.cart import CartLine, PersistentCartStore
from storefront.config import CHECKOUT_PAGE
from storefront.logging import get_logger, sanitize_for_logging

from .base import CartMount, Render

logger = get_logger(__name__)

ADDED_TO_CART = "{name} added to cart successfully! 🛒"
REDIRECTING_TO_CHECKOUT = "Redirecting to checkout for {name}..."


class CatalogMount(CartMount):
    name = "catalog"

    def __init__(
        self,
        store: PersistentCartStore,
        bus: BroadcastBus,
        api: StorefrontAPI,
        render: Optional[Render] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(store, bus, render, loop)
        self.api = api
        self.products: List[Dict[str, Any]] = []

    async def load_products(self) -> List[Dict[str, Any]]:
        """Fetch the catalog; on failure the list stays empty."""
        try:
            self.products = await self.api.get_products()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to load products: {e}", exc_info=True)
            self.products = []
        self._changed()
        return self.products

    def add_to_cart(self, product: Dict[str, Any]) -> CartLine:
        """Append the product as a new cart line and confirm to the user."""
        line = CartLine.from_product(product)
        self.cart_vm.add_line(line)
        logger.info(f"Added to cart: {sanitize_for_logging(line.name)}")
        self.notifications.show_success(ADDED_TO_CART.format(name=line.name), 3000)
        return line

    def buy_now(self, product: Dict[str, Any]) -> str:
        """
        Add the product and hand over to checkout.

        Returns:
            Checkout page to navigate to
        """
        line = CartLine.from_product(product)
        self.cart_vm.add_line(line)
        self.notifications.show_success(REDIRECTING_TO_CHECKOUT.format(name=line.name), 2000)
        return CHECKOUT_PAGE
