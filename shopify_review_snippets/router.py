"""FastAPI routers for the product page and the storefront snippet proxy."""

from typing import Optional
from time import perf_counter
import logging
from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import JSONResponse

from .auth import AdminContext, Authenticator
from .products import PAGE_SIZE, ProductUpdateError, load_products_page, save_product
from .storage import BaseSnippetStore
from .telemetry import get_request_duration_histogram

logger = logging.getLogger("shopify_review_snippets")


def get_products_router(
    store: BaseSnippetStore,
    authenticate: Authenticator,
    page_size: int = PAGE_SIZE,
) -> APIRouter:
    """
    Create the router for the embedded admin product page.

    Args:
        store: Snippet store
        authenticate: Dependency resolving the merchant's AdminContext
        page_size: Products per page

    Returns:
        APIRouter with the page loader (GET) and form action (POST)
    """
    router = APIRouter(prefix="/app", tags=["products"])
    duration_histogram = get_request_duration_histogram()

    @router.get("/products")
    async def list_products(
        cursor: Optional[str] = None,
        direction: str = "forward",
        context: AdminContext = Depends(authenticate),
    ):
        """Get one page of products with their review snippets."""
        start = perf_counter()
        page = await load_products_page(context, store, cursor, direction, page_size)
        if duration_histogram:
            duration_histogram.record(
                (perf_counter() - start) * 1000, attributes={"route": "products.list"}
            )
        return page

    @router.post("/products")
    async def update_product(
        product_id: Optional[str] = Form(None, alias="productId"),
        variant_id: Optional[str] = Form(None, alias="variantId"),
        price: Optional[str] = Form(None),
        review_snippet: Optional[str] = Form(None, alias="reviewSnippet"),
        context: AdminContext = Depends(authenticate),
    ):
        """Update a product's first variant price and its review snippet."""
        start = perf_counter()
        try:
            await save_product(context, store, product_id, variant_id, price, review_snippet)
        except ProductUpdateError as e:
            return JSONResponse(status_code=400, content={"error": e.message})
        finally:
            if duration_histogram:
                duration_histogram.record(
                    (perf_counter() - start) * 1000, attributes={"route": "products.update"}
                )
        return {"ok": True}

    return router


def get_proxy_router(store: BaseSnippetStore) -> APIRouter:
    """
    Create the router for the storefront app proxy.

    Requests are expected to be signature-checked upstream; this router does
    no verification of its own.
    """
    router = APIRouter(prefix="/proxy", tags=["proxy"])
    duration_histogram = get_request_duration_histogram()

    @router.get("/review-snippet")
    async def get_review_snippet(
        shop: Optional[str] = None,
        product_id: Optional[str] = Query(None, alias="productId"),
    ):
        """Get the stored review snippet of a product. Never answers with a 500."""
        start = perf_counter()
        try:
            if not product_id:
                return JSONResponse(status_code=400, content={"error": "Missing productId"})

            if not shop:
                # Storefront renders must not break over a missing shop
                logger.warning("review_snippet_missing_shop", extra={"product_id": product_id})
                return {"productId": product_id, "reviewSnippet": ""}

            snippet = store.find_one(shop, product_id)
            return {
                "productId": product_id,
                "reviewSnippet": snippet.content if snippet is not None else "",
            }
        except Exception:
            logger.exception("Error in review snippet proxy")
            return {"productId": None, "reviewSnippet": ""}
        finally:
            if duration_histogram:
                duration_histogram.record(
                    (perf_counter() - start) * 1000, attributes={"route": "proxy.review_snippet"}
                )

    return router
