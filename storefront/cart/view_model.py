"""Per-mount-point cart view model over the shared store and bus."""
from decimal import Decimal
from typing import Callable, List, Optional

from storefront.bus import BroadcastBus, Unsubscribe
from storefront.logging import get_logger

from .models import Cart, CartLine
from .store import PersistentCartStore

logger = get_logger(__name__)


class CartViewModel:
    """
    Cart state for one mount point.

    The local cart is a cache. Every mutation starts from a fresh read of
    the store and writes the result back, which broadcasts. Every broadcast,
    including the ones this instance caused, triggers a full re-read; an
    inactive view model updates its local copy directly instead.

    Usage:
        with CartViewModel(store, bus, on_change=render) as vm:
            vm.add_line(CartLine.from_product(product))
            vm.decrease_quantity(0)
    """

    def __init__(
        self,
        store: PersistentCartStore,
        bus: BroadcastBus,
        on_change: Optional[Callable[[Cart], None]] = None,
        name: str = "cart",
    ):
        self.store = store
        self.bus = bus
        self.on_change = on_change
        self.name = name
        self._cart: Optional[Cart] = None
        self._unsubscribe: Optional[Unsubscribe] = None

    def __enter__(self) -> "CartViewModel":
        return self.activate()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.deactivate()

    @property
    def is_active(self) -> bool:
        return self._unsubscribe is not None

    def activate(self) -> "CartViewModel":
        """Initial read, then follow broadcasts."""
        if self.is_active:
            return self
        self.refresh()
        self._unsubscribe = self.bus.subscribe(self._handle_cart_updated)
        logger.debug(f"Cart view model '{self.name}' activated")
        return self

    def deactivate(self) -> None:
        """Stop following broadcasts. Safe to call more than once."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        logger.debug(f"Cart view model '{self.name}' deactivated")

    def _handle_cart_updated(self) -> None:
        self.refresh()

    def refresh(self) -> Cart:
        """Re-read the store and replace local state."""
        self._set_cart(self.store.read())
        return self._cart

    def _set_cart(self, cart: Cart) -> None:
        self._cart = cart
        if self.on_change is not None:
            self.on_change(cart)

    def _commit(self, cart: Cart) -> Cart:
        self.store.write(cart)
        # An active view model already re-read the store on its own broadcast
        if not self.is_active:
            self._set_cart(cart)
        return self._cart

    @property
    def cart(self) -> Cart:
        if self._cart is None:
            return self.refresh()
        return self._cart

    @property
    def lines(self) -> List[CartLine]:
        return list(self.cart.lines)

    @property
    def count(self) -> int:
        """Number of lines, as shown on the cart badge."""
        return len(self.cart)

    # Mutations

    def add_line(self, line: CartLine, merge: bool = False) -> Cart:
        """
        Append a line to the cart.

        Args:
            line: Line to add
            merge: Fold into an existing line for the same product instead
                of appending a duplicate

        Returns:
            Updated cart
        """
        current = self.store.read()
        updated = current.with_merged_line(line) if merge else current.with_line(line)
        return self._commit(updated)

    def remove_line(self, position: int) -> Cart:
        return self._commit(self.store.read().without_line(position))

    def increase_quantity(self, position: int) -> Cart:
        current = self.store.read()
        return self._commit(current.with_quantity(position, current[position].quantity + 1))

    def decrease_quantity(self, position: int) -> Cart:
        """Decrement a line's quantity; at 1 the line is removed instead."""
        current = self.store.read()
        quantity = current[position].quantity - 1
        if quantity < 1:
            return self._commit(current.without_line(position))
        return self._commit(current.with_quantity(position, quantity))

    def clear(self) -> Cart:
        return self._commit(Cart())

    def subtotal(self, cart: Optional[Cart] = None) -> Decimal:
        """Sum of unit price x quantity; non-numeric prices count as 0."""
        return (cart if cart is not None else self.cart).subtotal
