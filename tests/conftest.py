"""Pytest configuration and fixtures"""
from typing import Callable, List

import httpx
import pytest

from storefront.api import StorefrontAPI
from storefront.bus import BroadcastBus, EventDispatcher
from storefront.cart import PersistentCartStore
from storefront.storage import MemoryStorage


@pytest.fixture
def storage():
    """Empty page-local storage"""
    return MemoryStorage()


@pytest.fixture
def bus():
    """Fresh cart broadcast bus"""
    return BroadcastBus(EventDispatcher())


@pytest.fixture
def store(storage, bus):
    """Cart store over in-memory storage"""
    return PersistentCartStore(storage, bus)


@pytest.fixture
def sample_product():
    """Catalog record as served by the products endpoint"""
    return {
        "_id": "prod-rose",
        "name": "Rose",
        "price": "100",
        "description": "Rose eau de parfum",
        "image1": "rose-1",
        "image2": "rose-2",
    }


@pytest.fixture
def other_product():
    return {
        "_id": "prod-oud",
        "name": "Oud",
        "price": 50,
        "image1": "https://cdn.example.com/oud.jpeg",
    }


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_api(recorded_requests) -> Callable[..., StorefrontAPI]:
    """Build a StorefrontAPI whose transport is answered by ``handler``"""

    def factory(handler) -> StorefrontAPI:
        async def transport_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            result = handler(request)
            if hasattr(result, "__await__"):
                result = await result
            return result

        client = httpx.AsyncClient(
            base_url="http://api.test",
            transport=httpx.MockTransport(transport_handler),
        )
        return StorefrontAPI(base_url="http://api.test", client=client)

    return factory
