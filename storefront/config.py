"""
Storefront configuration

Environment-driven settings plus the fixed well-known names shared by
every mount point (storage key, broadcast event name).
"""

import os

# Remote API
STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:8000")
STOREFRONT_API_TIMEOUT = float(os.environ.get("STOREFRONT_API_TIMEOUT", "10"))

# Checkout
STOREFRONT_SHIPPING_FEE = os.environ.get("STOREFRONT_SHIPPING_FEE", "20")
STOREFRONT_CURRENCY = os.environ.get("STOREFRONT_CURRENCY", "EGP")

# Cart storage backend: "memory" or "redis"
STOREFRONT_STORAGE = os.environ.get("STOREFRONT_STORAGE", "memory").lower()

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Well-known names
CART_STORAGE_KEY = "cart"
CART_UPDATED_EVENT = "cartUpdated"
CHECKOUT_PAGE = "checkout.html"

# Notification durations (milliseconds)
DEFAULT_NOTIFICATION_MS = 3000
VALIDATION_NOTIFICATION_MS = 4000

# Logging: "detailed" locally, "plain" when STOREFRONT_ENV=production
STOREFRONT_ENV = os.environ.get("STOREFRONT_ENV", "development").lower()
STOREFRONT_LOG_LEVEL = os.environ.get("STOREFRONT_LOG_LEVEL", os.environ.get("LOG_LEVEL", "INFO")).upper()
STOREFRONT_LOG_FORMAT = os.environ.get(
    "STOREFRONT_LOG_FORMAT", "plain" if STOREFRONT_ENV == "production" else "detailed"
).lower()
