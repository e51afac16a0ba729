"""Shopify Admin GraphQL API client."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import ShopifyConfig
from .models.shopify_models import ProductConnection, UserError
from .queries import LIST_PRODUCTS_QUERY, UPDATE_VARIANT_PRICE_MUTATION

logger = logging.getLogger("shopify_review_snippets")


class AdminAPIError(Exception):
    """Raised when the Admin API answers with top-level GraphQL errors."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


class ShopifyAdminClient:
    """
    Thin async client for the Shopify Admin GraphQL API.

    Only the two operations the product page needs are wrapped: listing one
    page of products and bulk-updating variant prices. Anything else can go
    through `graphql()` directly.
    """

    def __init__(self, config: ShopifyConfig, client: Optional[Any] = None):
        """
        Initialize the client.

        Args:
            config: Shopify API configuration
            client: Optional HTTP client (e.g., MockShopifyClient)
        """
        self.config = config
        self.endpoint = f"/admin/api/{config.api_version}/graphql.json"

        if client is not None:
            self.client = client
            self._owns_client = False
        else:
            self.client = httpx.AsyncClient(
                base_url=f"https://{config.shop_domain}",
                headers={
                    "X-Shopify-Access-Token": config.access_token,
                    "Content-Type": "application/json",
                },
                timeout=30.0
            )
            self._owns_client = True

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL document and return its `data` object.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            AdminAPIError: If the response carries top-level `errors`
        """
        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        response = await self.client.post(self.endpoint, json=payload)
        response.raise_for_status()
        body = response.json()

        errors = body.get("errors")
        if errors:
            messages = [e.get("message", str(e)) for e in errors]
            logger.error("graphql_errors", extra={"errors": messages})
            raise AdminAPIError(messages)

        return body.get("data") or {}

    async def list_products(self, variables: Dict[str, Any]) -> ProductConnection:
        """
        Fetch one page of products with their featured image and first variant.

        Args:
            variables: `first/after` or `last/before` pagination arguments

        Returns:
            The products connection for that page
        """
        data = await self.graphql(LIST_PRODUCTS_QUERY, variables)
        return ProductConnection(**data["products"])

    async def update_variant_price(
        self, product_id: str, variant_id: str, price: Optional[str]
    ) -> List[UserError]:
        """
        Set the price of one variant through `productVariantsBulkUpdate`.

        Returns:
            The user errors reported by Shopify (empty on success)
        """
        data = await self.graphql(
            UPDATE_VARIANT_PRICE_MUTATION,
            {
                "productId": product_id,
                "variants": [{"id": variant_id, "price": price}],
            },
        )
        result = data["productVariantsBulkUpdate"] or {}
        return [UserError(**e) for e in result.get("userErrors") or []]
