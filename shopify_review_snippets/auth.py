"""Authenticated admin context passed to the product page handlers."""

from typing import Awaitable, Callable

from fastapi import Request
from pydantic import BaseModel, ConfigDict

from .admin_client import ShopifyAdminClient


class AdminContext(BaseModel):
    """An authenticated merchant session: the shop and its Admin API client."""
    shop: str
    admin: ShopifyAdminClient

    model_config = ConfigDict(arbitrary_types_allowed=True)


# Implementations must annotate their argument as `Request` for FastAPI to inject it
Authenticator = Callable[[Request], Awaitable[AdminContext]]


def get_offline_authenticator(admin: ShopifyAdminClient) -> Authenticator:
    """
    Authenticator for a single shop using its offline access token.

    Embedded-app session token exchange happens outside this package; apps
    that need it pass their own authenticator to `create_app`. It may raise
    `HTTPException(401)` to reject a request.
    """
    context = AdminContext(shop=admin.config.shop_domain, admin=admin)

    async def authenticate(_request: Request) -> AdminContext:
        return context

    return authenticate
