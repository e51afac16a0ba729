"""
Shopify Review Snippets

A Shopify admin add-on that edits product prices alongside locally stored
review snippets, and serves those snippets to the storefront through an
app proxy.
"""

__version__ = "0.1.0"

from .admin_client import ShopifyAdminClient, AdminAPIError
from .app import create_app
from .config import AppConfig
from .mock_client import MockShopifyClient
from .storage import InMemorySnippetStore, SQLSnippetStore

__all__ = [
    "ShopifyAdminClient",
    "AdminAPIError",
    "create_app",
    "AppConfig",
    "MockShopifyClient",
    "InMemorySnippetStore",
    "SQLSnippetStore",
]
