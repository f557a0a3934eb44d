"""Mount points: independently rendered UI trees sharing only the store and bus."""
from .base import CartMount, Mount
from .catalog import CatalogMount
from .checkout import CheckoutMount
from .contact import ContactMount
from .indicator import CartIndicatorMount

__all__ = [
    "CartIndicatorMount",
    "CartMount",
    "CatalogMount",
    "CheckoutMount",
    "ContactMount",
    "Mount",
]
