"""Mock Shopify Admin GraphQL client for sandbox mode."""

import base64
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


class MockResponse:
    """Minimal response object compatible with admin client usage."""

    def __init__(self, data: Dict[str, Any], status_code: int = 200, headers: Optional[Dict[str, str]] = None):
        self._data = data
        self.status_code = status_code
        self.headers = headers or {}

    def json(self) -> Dict[str, Any]:
        return self._data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise RuntimeError(f"Mock HTTP error {self.status_code}")


def sample_catalogue(count: int = 12) -> List[Dict[str, Any]]:
    """Build `count` sample products in Admin API node shape."""
    products = []
    for n in range(1, count + 1):
        products.append(
            {
                "id": f"gid://shopify/Product/{n}",
                "title": f"Mock Product {n}",
                "featuredImage": (
                    {"url": f"https://example.com/products/{n}.jpg", "altText": f"Mock Product {n}"}
                    if n % 3
                    else None
                ),
                "variants": {
                    "edges": [
                        {"node": {"id": f"gid://shopify/ProductVariant/{n}", "price": f"{n * 5}.00"}}
                    ]
                },
            }
        )
    return products


class MockShopifyClient:
    """
    Mock Shopify client that serves a sample catalogue.

    Answers the `ListProducts` query with Shopify-style cursor pagination
    and the `productVariantsBulkUpdate` mutation with user errors for unknown
    ids or invalid prices. Every request payload is kept in `requests`.
    """

    def __init__(self, products: Optional[List[Dict[str, Any]]] = None):
        self.products = products if products is not None else sample_catalogue()
        self.requests: List[Dict[str, Any]] = []

    @staticmethod
    def encode_cursor(index: int) -> str:
        return base64.urlsafe_b64encode(f"mock:{index}".encode()).decode()

    @staticmethod
    def decode_cursor(cursor: str) -> int:
        try:
            prefix, index = base64.urlsafe_b64decode(cursor.encode()).decode().split(":")
            if prefix != "mock":
                raise ValueError(cursor)
            return int(index)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError(f"Invalid cursor: {cursor}") from exc

    async def post(self, _endpoint: str, json: Optional[Dict[str, Any]] = None, **_kwargs) -> MockResponse:
        payload = json or {}
        self.requests.append(payload)
        query = payload.get("query", "")
        variables = payload.get("variables") or {}

        try:
            if "productVariantsBulkUpdate" in query:
                return MockResponse({"data": self._update_variant_price(variables)})
            if "products(" in query:
                return MockResponse({"data": self._list_products(variables)})
        except ValueError as exc:
            return MockResponse({"errors": [{"message": str(exc)}]})
        return MockResponse({"errors": [{"message": "Unsupported operation"}]})

    async def aclose(self) -> None:
        return None

    def _list_products(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        total = len(self.products)
        if variables.get("last") is not None:
            before = variables.get("before")
            end = self.decode_cursor(before) if before else total
            start = max(0, end - variables["last"])
        else:
            after = variables.get("after")
            start = self.decode_cursor(after) + 1 if after else 0
            end = min(total, start + (variables.get("first") or total))

        edges = [
            {"cursor": self.encode_cursor(i), "node": self.products[i]}
            for i in range(start, end)
        ]
        return {
            "products": {
                "edges": edges,
                "pageInfo": {
                    "hasNextPage": end < total,
                    "hasPreviousPage": start > 0,
                    "startCursor": edges[0]["cursor"] if edges else None,
                    "endCursor": edges[-1]["cursor"] if edges else None,
                },
            }
        }

    def _update_variant_price(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        user_errors = []
        updated = []
        product = next((p for p in self.products if p["id"] == variables.get("productId")), None)
        if product is None:
            user_errors.append({"field": ["productId"], "message": "Product does not exist"})
        else:
            variants = {edge["node"]["id"]: edge["node"] for edge in product["variants"]["edges"]}
            for i, change in enumerate(variables.get("variants") or []):
                variant = variants.get(change.get("id"))
                if variant is None:
                    user_errors.append({"field": ["variants", str(i), "id"], "message": "Product variant does not exist"})
                    continue
                try:
                    price = Decimal(str(change.get("price")))
                except InvalidOperation:
                    price = None
                if price is None or not price.is_finite() or price < 0:
                    user_errors.append({"field": ["variants", str(i), "price"], "message": "Price is invalid"})
                    continue
                updated.append((variant, str(price.quantize(Decimal("0.01")))))

        if user_errors:
            return {"productVariantsBulkUpdate": {"productVariants": None, "userErrors": user_errors}}

        for variant, price in updated:
            variant["price"] = price
        return {
            "productVariantsBulkUpdate": {
                "productVariants": [{"id": v["id"], "price": v["price"]} for v, _ in updated],
                "userErrors": [],
            }
        }
