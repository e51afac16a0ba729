"""Product page logic: load a page of products with snippets, save price and snippet."""

import logging
from typing import Any, Dict, Optional

from .auth import AdminContext
from .models.shopify_models import ProductConnection
from .storage import BaseSnippetStore

logger = logging.getLogger("shopify_review_snippets")

PAGE_SIZE = 5


class ProductUpdateError(Exception):
    """A product form submission was rejected; reported to the merchant as a 400."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def page_variables(
    cursor: Optional[str] = None,
    direction: Optional[str] = None,
    page_size: int = PAGE_SIZE,
) -> Dict[str, Any]:
    """
    Map a cursor and direction to Shopify's pagination arguments.

    Backward paging uses `last/before`, anything else `first/after`. A
    missing or empty cursor requests the first (or last) page.
    """
    if direction == "backward":
        return {"last": page_size, "before": cursor or None}
    return {"first": page_size, "after": cursor or None}


async def load_products_page(
    context: AdminContext,
    store: BaseSnippetStore,
    cursor: Optional[str] = None,
    direction: Optional[str] = None,
    page_size: int = PAGE_SIZE,
) -> Dict[str, Any]:
    """
    Fetch one page of products and the stored snippets for exactly those products.

    Returns:
        `{"products": {"edges": [...], "pageInfo": {...}}, "snippetMap": {id: content}}`
    """
    products: ProductConnection = await context.admin.list_products(
        page_variables(cursor, direction, page_size)
    )

    snippet_map: Dict[str, str] = {}
    product_ids = products.product_ids
    if product_ids:
        for snippet in store.find_many(context.shop, product_ids):
            snippet_map[snippet.product_id] = snippet.content

    logger.info(
        "products_page_loaded",
        extra={"shop": context.shop, "count": len(product_ids), "snippets": len(snippet_map)},
    )
    return {
        "products": products.model_dump(mode="json", by_alias=True),
        "snippetMap": snippet_map,
    }


async def save_product(
    context: AdminContext,
    store: BaseSnippetStore,
    product_id: Optional[str],
    variant_id: Optional[str],
    price: Optional[str],
    review_snippet: Optional[str] = None,
) -> None:
    """
    Update the first variant's price in Shopify, then upsert the review snippet.

    The snippet is only written once Shopify has accepted the price; a
    rejected price leaves the store untouched and nothing is rolled back
    on the Shopify side.

    Raises:
        ProductUpdateError: On missing ids or Shopify user errors
    """
    if not product_id or not variant_id:
        raise ProductUpdateError("Missing product or variant id")

    user_errors = await context.admin.update_variant_price(product_id, variant_id, price)
    if user_errors:
        message = ", ".join(e.message for e in user_errors)
        logger.warning(
            "variant_price_rejected",
            extra={"shop": context.shop, "product_id": product_id, "errors": message},
        )
        raise ProductUpdateError(message)

    store.upsert(context.shop, product_id, review_snippet or "")
    logger.info("product_saved", extra={"shop": context.shop, "product_id": product_id})
