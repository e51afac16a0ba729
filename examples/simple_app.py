from shopify_review_snippets import AppConfig, create_app

config = AppConfig(
    shopify={
        "shop_domain": "mystore.myshopify.com",
        "access_token": "shpat_xxxxx",
        "api_version": "2025-01",
    },
    database={"url": "sqlite:///review_snippets.db"},
    sandbox=True,
)

app = create_app(config)

# Run: uvicorn examples.simple_app:app --reload
