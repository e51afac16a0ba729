"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI

from .admin_client import ShopifyAdminClient
from .auth import Authenticator, get_offline_authenticator
from .config import AppConfig, LoggingConfig
from .mock_client import MockShopifyClient
from .router import get_products_router, get_proxy_router
from .storage import BaseSnippetStore, SQLSnippetStore


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from the logging section of the config."""
    logging.basicConfig(
        filename=config.filename,
        level=getattr(logging, config.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(
    config: AppConfig,
    store: Optional[BaseSnippetStore] = None,
    authenticate: Optional[Authenticator] = None,
    client: Optional[Any] = None,
) -> FastAPI:
    """
    Create the app serving the product page and the snippet proxy.

    Args:
        config: App configuration
        store: Snippet store (defaults to a SQL store on `config.database.url`)
        authenticate: Dependency resolving the AdminContext (defaults to the
            configured shop's offline token). FastAPI injects its argument
            by annotation, so it must be declared as `request: Request`;
            an unannotated argument is read as a required query parameter
        client: Optional HTTP client for the Admin API (e.g., MockShopifyClient)

    Returns:
        FastAPI application
    """
    configure_logging(config.logging)
    logger = logging.getLogger("shopify_review_snippets")

    if client is None and config.sandbox:
        client = MockShopifyClient()
    admin = ShopifyAdminClient(config.shopify, client=client)

    owned_store: Optional[SQLSnippetStore] = None
    if store is None:
        owned_store = SQLSnippetStore(config.database.url, echo=config.database.echo)
        owned_store.create_all()
        store = owned_store

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info(
            "app_started",
            extra={"shop": config.shopify.shop_domain, "sandbox": config.sandbox},
        )
        yield
        await admin.close()
        if owned_store is not None:
            owned_store.close()

    app = FastAPI(title="Shopify Review Snippets", lifespan=lifespan)
    app.include_router(
        get_products_router(
            store,
            authenticate or get_offline_authenticator(admin),
            page_size=config.page_size,
        )
    )
    app.include_router(get_proxy_router(store))

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
