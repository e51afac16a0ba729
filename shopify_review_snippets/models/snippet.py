"""SQLAlchemy model for locally stored review snippets."""

from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ReviewSnippet(Base):
    __tablename__ = "review_snippets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shop = Column(String(255), nullable=False)
    product_id = Column("productId", String(255), nullable=False)  # Shopify product GID
    content = Column(Text, nullable=False, default="")

    # At most one snippet per product per shop
    __table_args__ = (
        UniqueConstraint("shop", "productId", name="uq_review_snippet_shop_product"),
    )

    def __repr__(self) -> str:
        return f"<ReviewSnippet shop={self.shop!r} product_id={self.product_id!r}>"
