"""Shared plumbing for independently mounted UI trees."""
import asyncio
from typing import Callable, Optional

from storefront.bus import BroadcastBus
from storefront.cart import Cart, CartViewModel, PersistentCartStore
from storefront.notifications import NotificationScheduler

Render = Callable[[], None]


class Mount:
    """
    One mounted UI tree with its own notification queue.

    ``render`` is called whenever state this tree displays changes.
    ``loop`` drives notification expiry; without one the running loop is
    used at the first notification.
    """

    name = "mount"

    def __init__(
        self,
        render: Optional[Render] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.render = render
        self.notifications = NotificationScheduler(on_change=self._changed, loop=loop)
        self.mounted = False

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    def mount(self):
        self.mounted = True
        return self

    def unmount(self) -> None:
        """Tear down: cancel pending notification timers."""
        self.notifications.close()
        self.mounted = False

    def _changed(self) -> None:
        if self.render is not None:
            self.render()


class CartMount(Mount):
    """Mounted tree that displays or edits the shared cart."""

    def __init__(
        self,
        store: PersistentCartStore,
        bus: BroadcastBus,
        render: Optional[Render] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(render, loop)
        self.cart_vm = CartViewModel(store, bus, on_change=self._cart_changed, name=self.name)

    def mount(self):
        self.cart_vm.activate()
        return super().mount()

    def unmount(self) -> None:
        self.cart_vm.deactivate()
        super().unmount()

    @property
    def cart(self) -> Cart:
        return self.cart_vm.cart

    def _cart_changed(self, cart: Cart) -> None:
        self._changed()
