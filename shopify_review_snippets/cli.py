"""Command-line interface for Shopify Review Snippets."""

import asyncio
import json
from pathlib import Path
from typing import Optional
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .admin_client import ShopifyAdminClient
from .auth import AdminContext
from .config import AppConfig, load_config
from .mock_client import MockShopifyClient
from .products import load_products_page
from .storage import SQLSnippetStore

app = typer.Typer(
    name="shopify-review-snippets",
    help="Shopify product price and review snippet manager"
)
console = Console()


def _load_config(config_path: str) -> AppConfig:
    """Load configuration, exiting with a readable error."""
    if not Path(config_path).exists():
        console.print(f"[red]Error: Config file not found: {config_path}[/red]")
        raise typer.Exit(1)
    try:
        return load_config(config_path)
    except (ValidationError, json.JSONDecodeError) as e:
        console.print(f"[red]✗ Configuration error:[/red] {str(e)}")
        raise typer.Exit(1)


def _store(cfg: AppConfig) -> SQLSnippetStore:
    return SQLSnippetStore(cfg.database.url, echo=cfg.database.echo)


@app.command()
def init(
    output: str = typer.Option("config.json", help="Output configuration file path")
):
    """Initialize a new configuration file with example values."""
    example_config = {
        "shopify": {
            "shop_domain": "your-store.myshopify.com",
            "access_token": "shpat_your_access_token_here",
            "api_version": "2025-01"
        },
        "database": {
            "url": "sqlite:///review_snippets.db",
            "echo": False
        },
        "logging": {
            "level": "INFO",
            "filename": "review_snippets.log"
        },
        "page_size": 5,
        "sandbox": False
    }

    output_path = Path(output)
    with open(output_path, 'w') as f:
        json.dump(example_config, f, indent=2)

    console.print(f"[green]✓[/green] Configuration file created: {output}")
    console.print("\n[yellow]⚠ Please edit the file and add your Shopify credentials![/yellow]")


@app.command()
def validate(
    config: str = typer.Option("config.json", help="Configuration file path"),
):
    """Validate configuration file."""
    cfg = _load_config(config)
    console.print("[green]✓[/green] Configuration is valid!")
    console.print(f"\n[bold]Shop:[/bold] {cfg.shopify.shop_domain}")
    console.print(f"[bold]API version:[/bold] {cfg.shopify.api_version}")
    console.print(f"[bold]Database:[/bold] {cfg.database.url}")
    console.print(f"[bold]Page size:[/bold] {cfg.page_size}")
    if cfg.sandbox:
        console.print("[yellow]Sandbox mode: Shopify calls are served by a mock catalogue[/yellow]")


@app.command("init-db")
def init_db(
    config: str = typer.Option("config.json", help="Configuration file path"),
):
    """Create the review snippet table."""
    cfg = _load_config(config)
    _store(cfg).create_all()
    console.print(f"[green]✓[/green] Snippet table ready in {cfg.database.url}")


@app.command()
def serve(
    config: str = typer.Option("config.json", help="Configuration file path"),
    host: str = typer.Option("0.0.0.0", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
):
    """Start the app server."""
    from .app import create_app
    import uvicorn

    cfg = _load_config(config)
    web_app = create_app(cfg)

    console.print(f"[green]Starting server on {host}:{port}[/green]")
    console.print(f"[blue]Product page: http://{host}:{port}/app/products[/blue]")
    console.print(f"[blue]Snippet proxy: http://{host}:{port}/proxy/review-snippet[/blue]")

    uvicorn.run(web_app, host=host, port=port)


@app.command()
def products(
    config: str = typer.Option("config.json", help="Configuration file path"),
    cursor: Optional[str] = typer.Option(None, help="Cursor from a previous page"),
    direction: str = typer.Option("forward", help="'forward' or 'backward'"),
):
    """Print one page of products with their review snippets."""

    async def _products():
        cfg = _load_config(config)
        client = MockShopifyClient() if cfg.sandbox else None
        store = _store(cfg)
        store.create_all()

        async with ShopifyAdminClient(cfg.shopify, client=client) as admin:
            context = AdminContext(shop=cfg.shopify.shop_domain, admin=admin)
            page = await load_products_page(context, store, cursor, direction, cfg.page_size)

        table = Table(title="Products")
        table.add_column("ID", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("Price", justify="right", style="yellow")
        table.add_column("Review snippet", style="magenta")

        snippet_map = page["snippetMap"]
        for edge in page["products"]["edges"]:
            node = edge["node"]
            variants = node["variants"]["edges"]
            snippet = snippet_map.get(node["id"], "")
            table.add_row(
                node["id"],
                node["title"][:50] + "..." if len(node["title"]) > 50 else node["title"],
                variants[0]["node"]["price"] if variants else "",
                snippet[:60] + "..." if len(snippet) > 60 else snippet,
            )

        console.print(table)

        page_info = page["products"]["pageInfo"]
        if page_info["hasPreviousPage"]:
            console.print(f"Previous: --cursor {page_info['startCursor']} --direction backward")
        if page_info["hasNextPage"]:
            console.print(f"Next: --cursor {page_info['endCursor']} --direction forward")

    asyncio.run(_products())


@app.command()
def snippet(
    shop: str = typer.Argument(..., help="Shop domain"),
    product_id: str = typer.Argument(..., help="Shopify product GID"),
    config: str = typer.Option("config.json", help="Configuration file path"),
):
    """Print the stored review snippet of a product."""
    cfg = _load_config(config)
    store = _store(cfg)
    store.create_all()
    record = store.find_one(shop, product_id)
    if record is None:
        console.print(f"[yellow]No review snippet stored for {product_id}[/yellow]")
        raise typer.Exit(1)
    console.print(record.content)


if __name__ == "__main__":
    app()
