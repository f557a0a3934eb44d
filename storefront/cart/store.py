"""Persistent cart store: the single source of truth for cart contents."""
import json

from storefront.bus import BroadcastBus
from storefront.config import CART_STORAGE_KEY
from storefront.logging import get_logger, sanitize_for_logging
from storefront.storage import KeyValueStorage

from .models import Cart

logger = get_logger(__name__)


class PersistentCartStore:
    """
    Durable cart slot shared by every mount point.

    Every successful write is followed by a broadcast so other mounted
    view models re-read. Last write wins; there is no version check.

    Usage:
        store = PersistentCartStore(MemoryStorage(), BroadcastBus())
        cart = store.read()
        store.write(cart.with_line(line))
    """

    def __init__(self, storage: KeyValueStorage, bus: BroadcastBus, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.bus = bus
        self.key = key

    def read(self) -> Cart:
        """
        Read the stored cart.

        Returns:
            Stored cart, or an empty cart if absent or malformed
        """
        raw = self.storage.get(self.key)
        if raw is None or raw == "":
            return Cart()

        try:
            return Cart.from_list(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                f"Malformed cart payload under '{self.key}', treating as empty: {e} "
                f"(payload: {sanitize_for_logging(raw)})"
            )
            return Cart()

    def write(self, cart: Cart) -> None:
        """Persist the cart (empty included) and broadcast the change."""
        self.storage.set(self.key, json.dumps(cart.to_list(), ensure_ascii=False))
        logger.debug(f"Cart written with {len(cart)} line(s)")
        self.bus.publish()

    def clear(self) -> None:
        """Persist an empty cart; other mounts observe it through the broadcast."""
        self.write(Cart())
