"""Data models for Shopify responses and the local snippet table."""

from .shopify_models import (
    Product,
    ProductImage,
    ProductVariant,
    ProductEdge,
    ProductConnection,
    PageInfo,
    UserError,
)
from .snippet import Base, ReviewSnippet

__all__ = [
    "Product",
    "ProductImage",
    "ProductVariant",
    "ProductEdge",
    "ProductConnection",
    "PageInfo",
    "UserError",
    "Base",
    "ReviewSnippet",
]
