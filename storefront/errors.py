"""
Common Error Constants

User-facing messages shown as notifications, plus the small exception
hierarchy raised inside the storefront core.
"""

# Validation
ERROR_INVALID_PHONE = "Please enter a valid phone number"
ERROR_INVALID_EMAIL = "Please enter a valid email address"
ERROR_EMPTY_CART = "Your cart is empty. Please add items before checkout."
WARNING_MISSING_FIELDS = "Please fill in the following required fields: {fields}"

# Remote calls
ERROR_SERVER_PROBLEM = "There was a problem with the server. Please try again later."
ERROR_SERVER_STATUS = "Server error: {status}. Please try again later."
ERROR_NETWORK = "Network error. Please check your internet connection and try again."
ERROR_UNEXPECTED = "An unexpected error occurred. Please try again."


class StorefrontError(Exception):
    """Base class for storefront core errors."""


class CartPositionError(StorefrontError, IndexError):
    """Cart line position is out of range."""

    def __init__(self, position: int, size: int):
        super().__init__(f"Cart position {position} out of range for cart of {size} lines")
        self.position = position
        self.size = size


class SubmissionInProgress(StorefrontError):
    """A form submission is already in flight."""
