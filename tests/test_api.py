"""Tests for the storefront API client"""
import json

import httpx
import pytest

from storefront.api import describe_submission_error
from storefront.errors import ERROR_NETWORK, ERROR_UNEXPECTED


@pytest.mark.asyncio
async def test_get_products(make_api, recorded_requests, sample_product):
    api = make_api(lambda request: httpx.Response(200, json=[sample_product]))

    products = await api.get_products()

    assert products == [sample_product]
    assert recorded_requests[0].method == "GET"
    assert recorded_requests[0].url.path == "/products"
    await api.aclose()


@pytest.mark.asyncio
async def test_get_products_non_list_body(make_api):
    api = make_api(lambda request: httpx.Response(200, json={"items": []}))

    assert await api.get_products() == []
    await api.aclose()


@pytest.mark.asyncio
async def test_get_products_error_status_raises(make_api):
    api = make_api(lambda request: httpx.Response(503))

    with pytest.raises(httpx.HTTPStatusError):
        await api.get_products()
    await api.aclose()


@pytest.mark.asyncio
async def test_submit_order_posts_json(make_api, recorded_requests):
    api = make_api(lambda request: httpx.Response(200, json={"ok": True}))

    response = await api.submit_order({"fName": "Mona", "cart": []})

    assert response.status_code == 200
    assert recorded_requests[0].url.path == "/order"
    assert json.loads(recorded_requests[0].content) == {"fName": "Mona", "cart": []}
    await api.aclose()


@pytest.mark.asyncio
async def test_submit_contact_error_status_raises(make_api, recorded_requests):
    api = make_api(lambda request: httpx.Response(500))

    with pytest.raises(httpx.HTTPStatusError):
        await api.submit_contact({"name": "Mona"})
    assert recorded_requests[0].url.path == "/contact"
    await api.aclose()


def test_describe_server_error():
    request = httpx.Request("POST", "http://api.test/order")
    error = httpx.HTTPStatusError("boom", request=request, response=httpx.Response(502, request=request))

    assert describe_submission_error(error) == "Server error: 502. Please try again later."


def test_describe_network_error():
    request = httpx.Request("POST", "http://api.test/order")

    assert describe_submission_error(httpx.ConnectError("refused", request=request)) == ERROR_NETWORK
    assert describe_submission_error(httpx.ReadTimeout("slow", request=request)) == ERROR_NETWORK


def test_describe_unexpected_error():
    assert describe_submission_error(KeyError("cart")) == ERROR_UNEXPECTED
