import pytest

from shopify_review_snippets.admin_client import ShopifyAdminClient
from shopify_review_snippets.auth import AdminContext
from shopify_review_snippets.config import AppConfig
from shopify_review_snippets.mock_client import MockShopifyClient, MockResponse
from shopify_review_snippets.storage import InMemorySnippetStore

SHOP = "mystore.myshopify.com"


def make_config(**overrides):
    data = {
        "shopify": {
            "shop_domain": SHOP,
            "access_token": "shpat_test",
            "api_version": "2025-01",
        },
        "logging": {"level": "WARNING", "filename": None},
    }
    data.update(overrides)
    return AppConfig(**data)


class StubClient:
    """HTTP client double returning the same GraphQL body for every request."""

    def __init__(self, body):
        self.body = body
        self.requests = []

    async def post(self, _endpoint, json=None, **_kwargs):
        self.requests.append(json)
        return MockResponse(self.body)

    async def aclose(self):
        return None


class RecordingStore(InMemorySnippetStore):
    """In-memory store that records every lookup and write."""

    def __init__(self):
        super().__init__()
        self.find_many_calls = []
        self.upsert_calls = []

    def find_many(self, shop, product_ids):
        product_ids = list(product_ids)
        self.find_many_calls.append((shop, product_ids))
        return super().find_many(shop, product_ids)

    def upsert(self, shop, product_id, content):
        self.upsert_calls.append((shop, product_id, content))
        super().upsert(shop, product_id, content)


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def mock_client():
    return MockShopifyClient()


@pytest.fixture
def admin_context(config, mock_client):
    admin = ShopifyAdminClient(config.shopify, client=mock_client)
    return AdminContext(shop=SHOP, admin=admin)


@pytest.fixture
def store():
    return RecordingStore()
