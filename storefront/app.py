"""
Storefront composition root.

Builds the process-wide collaborators once (storage, dispatcher, bus,
cart store, API client) and hands them by reference to every mount point.
"""
import asyncio
from decimal import Decimal
from typing import Optional, Union

from storefront.api import StorefrontAPI
from storefront.bus import BroadcastBus, EventDispatcher
from storefront.cart import PersistentCartStore
from storefront.checkout import SHIPPING_FEE
from storefront.config import STOREFRONT_STORAGE
from storefront.logging import get_logger
from storefront.mounts import CartIndicatorMount, CatalogMount, CheckoutMount, ContactMount
from storefront.mounts.base import Render
from storefront.storage import KeyValueStorage, MemoryStorage, RedisStorage

logger = get_logger(__name__)


class Storefront:
    """
    Page-load context shared by all mount points.

    Notification timers run on ``loop``: the one passed in, else the loop
    running when the first mount is created, else a loop this storefront
    creates for plain synchronous callers (expiry then happens whenever
    that loop is run).

    Usage:
        storefront = create_storefront()
        catalog = storefront.mount_catalog(render=draw_catalog)
        indicator = storefront.mount_cart_indicator(render=draw_badge)
        catalog.add_to_cart(product)   # indicator re-renders via the bus
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        api: Optional[StorefrontAPI] = None,
        shipping: Union[str, int, Decimal] = SHIPPING_FEE,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.dispatcher = EventDispatcher()
        self.bus = BroadcastBus(self.dispatcher)
        self.store = PersistentCartStore(self.storage, self.bus)
        self.api = api if api is not None else StorefrontAPI()
        self.shipping = shipping
        self._loop = loop
        self._owns_loop = False

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                self._loop = asyncio.new_event_loop()
                self._owns_loop = True
                logger.debug("No running event loop; storefront created its own")
        return self._loop

    def mount_catalog(self, render: Optional[Render] = None) -> CatalogMount:
        return CatalogMount(self.store, self.bus, self.api, render, loop=self.loop).mount()

    def mount_cart_indicator(self, render: Optional[Render] = None) -> CartIndicatorMount:
        return CartIndicatorMount(self.store, self.bus, render, loop=self.loop).mount()

    def mount_checkout(self, render: Optional[Render] = None) -> CheckoutMount:
        return CheckoutMount(
            self.store, self.bus, self.api, render, shipping=self.shipping, loop=self.loop
        ).mount()

    def mount_contact(self, render: Optional[Render] = None) -> ContactMount:
        return ContactMount(self.api, render, loop=self.loop).mount()

    async def aclose(self) -> None:
        await self.api.aclose()
        self._close_own_loop()

    def close(self) -> None:
        """Synchronous teardown for callers that never started a loop."""
        if self._owns_loop and not self._loop.is_closed():
            self._loop.run_until_complete(self.api.aclose())
        self._close_own_loop()

    def _close_own_loop(self) -> None:
        if self._owns_loop and not self._loop.is_running() and not self._loop.is_closed():
            self._loop.close()


def create_storefront(storage_backend: str = STOREFRONT_STORAGE) -> Storefront:
    """
    Build a Storefront from configuration.

    Args:
        storage_backend: "redis" for Upstash Redis, anything else for in-memory
    """
    if storage_backend == "redis":
        storage: KeyValueStorage = RedisStorage()
    else:
        storage = MemoryStorage()
    logger.info(f"Storefront created with {type(storage).__name__}")
    return Storefront(storage=storage)
