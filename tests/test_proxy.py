import pytest
import httpx
from fastapi import FastAPI

from shopify_review_snippets.router import get_proxy_router
from shopify_review_snippets.storage import BaseSnippetStore, InMemorySnippetStore

from conftest import SHOP


class BrokenStore(BaseSnippetStore):
    """Store whose every operation fails like an unreachable database."""

    def find_many(self, shop, product_ids):
        raise RuntimeError("database unavailable")

    def find_one(self, shop, product_id):
        raise RuntimeError("database unavailable")

    def upsert(self, shop, product_id, content):
        raise RuntimeError("database unavailable")


def make_client(store):
    app = FastAPI()
    app.include_router(get_proxy_router(store))
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_returns_stored_snippet():
    store = InMemorySnippetStore()
    store.upsert(SHOP, "gid://shopify/Product/1", "Customers love it")

    async with make_client(store) as client:
        response = await client.get(
            "/proxy/review-snippet",
            params={"shop": SHOP, "productId": "gid://shopify/Product/1"},
        )

    assert response.status_code == 200
    assert response.json() == {
        "productId": "gid://shopify/Product/1",
        "reviewSnippet": "Customers love it",
    }


@pytest.mark.asyncio
async def test_unknown_product_gets_empty_snippet():
    async with make_client(InMemorySnippetStore()) as client:
        response = await client.get(
            "/proxy/review-snippet",
            params={"shop": SHOP, "productId": "gid://shopify/Product/404"},
        )

    assert response.status_code == 200
    assert response.json() == {"productId": "gid://shopify/Product/404", "reviewSnippet": ""}


@pytest.mark.asyncio
async def test_snippets_are_scoped_to_shop():
    store = InMemorySnippetStore()
    store.upsert("other.myshopify.com", "p1", "Other shop's snippet")

    async with make_client(store) as client:
        response = await client.get("/proxy/review-snippet", params={"shop": SHOP, "productId": "p1"})

    assert response.json() == {"productId": "p1", "reviewSnippet": ""}


@pytest.mark.asyncio
async def test_missing_shop_is_soft():
    async with make_client(InMemorySnippetStore()) as client:
        response = await client.get("/proxy/review-snippet", params={"productId": "p1"})

    assert response.status_code == 200
    assert response.json() == {"productId": "p1", "reviewSnippet": ""}


@pytest.mark.asyncio
async def test_missing_product_id_is_400():
    async with make_client(InMemorySnippetStore()) as client:
        neither = await client.get("/proxy/review-snippet")
        shop_only = await client.get("/proxy/review-snippet", params={"shop": SHOP})

    assert neither.status_code == 400
    assert neither.json() == {"error": "Missing productId"}
    assert shop_only.status_code == 400


@pytest.mark.asyncio
async def test_store_failure_never_surfaces():
    async with make_client(BrokenStore()) as client:
        response = await client.get("/proxy/review-snippet", params={"shop": SHOP, "productId": "p1"})

    assert response.status_code == 200
    assert response.json() == {"productId": None, "reviewSnippet": ""}
