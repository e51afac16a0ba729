"""Configuration management for the review snippets app."""

import json
from pathlib import Path
from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class ShopifyConfig(BaseModel):
    """Shopify Admin API configuration."""
    shop_domain: str = Field(..., description="Shopify shop domain (e.g., 'mystore.myshopify.com')")
    access_token: str = Field(..., description="Shopify Admin API access token")
    api_version: str = Field("2025-01", description="Shopify Admin API version")


class DatabaseConfig(BaseModel):
    """Snippet store database configuration."""
    url: str = Field("sqlite:///review_snippets.db", description="SQLAlchemy database URL")
    echo: bool = Field(False, description="Log every SQL statement")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field("INFO", description="Log level name")
    filename: Optional[str] = Field(
        "review_snippets.log",
        description="Log file path (None logs to stderr)"
    )


class AppConfig(BaseModel):
    """Main configuration for the review snippets app."""
    shopify: ShopifyConfig
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    page_size: int = Field(5, ge=1, le=250, description="Products shown per page")
    sandbox: bool = Field(False, description="Serve a mock catalogue instead of calling Shopify")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "shopify": {
                    "shop_domain": "mystore.myshopify.com",
                    "access_token": "shpat_xxxxx",
                    "api_version": "2025-01"
                },
                "database": {
                    "url": "sqlite:///review_snippets.db"
                },
                "logging": {
                    "level": "INFO",
                    "filename": "review_snippets.log"
                },
                "page_size": 5,
                "sandbox": False
            }
        }
    )


def load_config(config_path: Union[str, Path]) -> AppConfig:
    """Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file content is not a valid config
    """
    config_file = Path(config_path)
    with open(config_file) as f:
        config_data = json.load(f)
    return AppConfig(**config_data)
