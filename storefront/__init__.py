"""Storefront client core: shared cart state, broadcast sync, and notifications."""
from .app import Storefront, create_storefront

__all__ = [
    "Storefront",
    "create_storefront",
]
