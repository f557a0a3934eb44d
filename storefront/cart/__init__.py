"""Cart package: models, persistent store, and per-mount view model."""
from .models import Cart, CartLine
from .store import PersistentCartStore
from .view_model import CartViewModel

__all__ = [
    "Cart",
    "CartLine",
    "CartViewModel",
    "PersistentCartStore",
]
