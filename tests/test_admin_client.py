import pytest

from shopify_review_snippets.admin_client import AdminAPIError, ShopifyAdminClient
from shopify_review_snippets.mock_client import MockShopifyClient

from conftest import StubClient, make_config


@pytest.mark.asyncio
async def test_graphql_posts_to_versioned_endpoint():
    config = make_config()
    client = MockShopifyClient()
    admin = ShopifyAdminClient(config.shopify, client=client)

    assert admin.endpoint == "/admin/api/2025-01/graphql.json"
    page = await admin.list_products({"first": 3, "after": None})

    assert [e.node.id for e in page.edges] == [f"gid://shopify/Product/{n}" for n in (1, 2, 3)]
    assert page.edges[0].node.first_variant.price == "5.00"
    assert page.page_info.has_next_page is True
    assert page.page_info.has_previous_page is False


@pytest.mark.asyncio
async def test_top_level_errors_raise():
    config = make_config()
    admin = ShopifyAdminClient(
        config.shopify,
        client=StubClient({"errors": [{"message": "Invalid cursor"}, {"message": "Throttled"}]}),
    )

    with pytest.raises(AdminAPIError) as exc_info:
        await admin.list_products({"first": 5, "after": "garbage"})
    assert exc_info.value.messages == ["Invalid cursor", "Throttled"]


@pytest.mark.asyncio
async def test_bad_cursor_from_mock_is_an_upstream_error():
    config = make_config()
    admin = ShopifyAdminClient(config.shopify, client=MockShopifyClient())

    with pytest.raises(AdminAPIError):
        await admin.list_products({"first": 5, "after": "not-a-cursor"})


@pytest.mark.asyncio
async def test_update_variant_price_returns_user_errors():
    config = make_config()
    admin = ShopifyAdminClient(config.shopify, client=MockShopifyClient())

    errors = await admin.update_variant_price("gid://shopify/Product/1", "gid://shopify/ProductVariant/2", "3.00")
    assert [e.message for e in errors] == ["Product variant does not exist"]
    assert errors[0].field == ["variants", "0", "id"]

    assert await admin.update_variant_price("gid://shopify/Product/1", "gid://shopify/ProductVariant/1", "3") == []


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    config = make_config()
    closed = []

    class Client(StubClient):
        async def aclose(self):
            closed.append(True)

    async with ShopifyAdminClient(config.shopify, client=Client({})):
        pass
    assert closed == []
