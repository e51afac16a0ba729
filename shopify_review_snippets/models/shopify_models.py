"""Pydantic models for Shopify Admin GraphQL responses."""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class ProductImage(BaseModel):
    """Featured image of a product."""
    url: str
    alt_text: Optional[str] = Field(None, alias="altText")

    model_config = ConfigDict(populate_by_name=True)


class ProductVariant(BaseModel):
    """Product variant (only id and price are queried)."""
    id: str
    price: str


class VariantEdge(BaseModel):
    node: ProductVariant


class VariantConnection(BaseModel):
    edges: List[VariantEdge] = Field(default_factory=list)


class Product(BaseModel):
    """Shopify product with its featured image and first variant."""
    id: str
    title: str
    featured_image: Optional[ProductImage] = Field(None, alias="featuredImage")
    variants: VariantConnection = Field(default_factory=VariantConnection)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def first_variant(self) -> Optional[ProductVariant]:
        if not self.variants.edges:
            return None
        return self.variants.edges[0].node


class ProductEdge(BaseModel):
    cursor: str
    node: Product


class PageInfo(BaseModel):
    """Cursor pagination metadata returned by Shopify."""
    has_next_page: bool = Field(alias="hasNextPage")
    has_previous_page: bool = Field(alias="hasPreviousPage")
    start_cursor: Optional[str] = Field(None, alias="startCursor")
    end_cursor: Optional[str] = Field(None, alias="endCursor")

    model_config = ConfigDict(populate_by_name=True)


class ProductConnection(BaseModel):
    """One page of products."""
    edges: List[ProductEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(alias="pageInfo")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def product_ids(self) -> List[str]:
        return [edge.node.id for edge in self.edges]


class UserError(BaseModel):
    """Field-level error reported by a Shopify mutation."""
    field: Optional[List[str]] = None
    message: str
