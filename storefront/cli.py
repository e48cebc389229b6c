"""
Command line interface of the storefront backend.
Uses Typer with Rich output.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.logging_config import setup_logging
from config.settings import get_settings
from storefront.core.exceptions import StorefrontError
from storefront.core.models import CatalogQuery, Product
from storefront.service import Storefront

app = typer.Typer(
    name="storefront",
    help="Agricultural tyre storefront: catalog listings, size index and vendor tools.",
    add_completion=False,
)

console = Console()


def run_async(coro):
    """Runs a coroutine to completion."""
    return asyncio.run(coro)


def _fail(error: StorefrontError) -> None:
    console.print(f"[red]✗ {error.message}[/red]")
    raise typer.Exit(code=1)


@app.command("build-size-index")
def build_size_index(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (defaults to SIZE_INDEX_PATH)"),
):
    """
    Builds the diameter -> sizes index over the whole catalog.

    Examples:
        storefront build-size-index
        storefront build-size-index --output public/size-filter-data.json
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, component="cli")

    async def _build():
        async with Storefront(settings) as storefront:
            return await storefront.rebuild_size_index(output)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Fetching sizes from catalog...", total=None)
        try:
            index, path = run_async(_build())
        except StorefrontError as e:
            _fail(e)

    console.print(f"[green]✓ Size index saved to: {path}[/green]")
    console.print(
        f"Diameters: [cyan]{len(index.diameters)}[/cyan]  "
        f"Sizes: [cyan]{index.total_sizes}[/cyan]"
    )


@app.command("products")
def products(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search text"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category (alias accepted)"),
    segments: Optional[str] = typer.Option(None, "--segments", help="Comma separated segments"),
    size: Optional[str] = typer.Option(None, "--size", help="Exact size"),
    warehouse: Optional[str] = typer.Option(None, "--warehouse", "-w", help="Availability filter"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Page size"),
    json_output: bool = typer.Option(False, "--json", "-j", help="JSON output"),
):
    """
    Shows one page of the sorted catalog listing.

    Examples:
        storefront products --category Harvester --warehouse "In stock"
        storefront products --search 710/70 --limit 10
    """
    settings = get_settings()
    setup_logging(level="WARNING", component="cli")

    async def _query():
        async with Storefront(settings) as storefront:
            query = CatalogQuery(
                category=category,
                segments=segments,
                size=size,
                search=search,
                warehouse=warehouse,
                page=page,
                limit=storefront.clamp_limit(limit),
            )
            return await storefront.catalog.query_products(query)

    try:
        result = run_async(_query())
    except StorefrontError as e:
        _fail(e)

    if json_output:
        console.print_json(json.dumps(result.to_api(), ensure_ascii=False))
        return

    pagination = result.pagination
    _display_products(
        result.data,
        title=(
            f"Page {pagination.page}/{pagination.total_pages} "
            f"({pagination.total_items} products)"
        ),
    )


@app.command("similar")
def similar(
    size: str = typer.Argument(..., help="Tyre size (e.g. '710/70R42')"),
    exclude: Optional[int] = typer.Option(None, "--exclude", "-e", help="Product id to leave out"),
):
    """
    Lists every product of the same size.
    """
    settings = get_settings()
    setup_logging(level="WARNING", component="cli")

    async def _similar():
        async with Storefront(settings) as storefront:
            return await storefront.catalog.similar_products(size, exclude_id=exclude)

    try:
        items = run_async(_similar())
    except StorefrontError as e:
        _fail(e)

    if not items:
        console.print(f"[yellow]No products found for size '{size}'[/yellow]")
        return

    _display_products(items, title=f"Size {size}")


@app.command("table")
def table(
    sku: str = typer.Argument(..., help="Trelleborg SKU"),
):
    """
    Prints the normalized technical table of a Trelleborg SKU.
    """
    storefront = Storefront(get_settings())
    try:
        html = storefront.trelleborg.load_size_table(sku)
    except StorefrontError as e:
        _fail(e)
    finally:
        run_async(storefront.aclose())

    console.print(html, markup=False, highlight=False, soft_wrap=True)


@app.command("pressure")
def pressure(
    sku: str = typer.Argument(..., help="Trelleborg SKU"),
    speed: Optional[str] = typer.Option(None, "--speed", "-s", help="Speed label (defaults to the first)"),
    load: Optional[str] = typer.Option(None, "--load", "-l", help="Load in kg (defaults to the first)"),
):
    """
    Recommends an inflation pressure for a speed and load.

    Examples:
        storefront pressure 710-70R42
        storefront pressure 710-70R42 --speed 40 --load 5000
    """
    storefront = Storefront(get_settings())
    try:
        calc = storefront.trelleborg.load_calculator(sku)
    except StorefrontError as e:
        _fail(e)
    finally:
        run_async(storefront.aclose())

    calculator = storefront.pressure
    default_speed, default_load = calculator.default_selection(calc.cclist)
    speed = speed or default_speed
    load = load or (
        default_load if speed == default_speed
        else next(iter(calculator.load_options(calc.cclist, speed)), "")
    )

    meta = calc.meta.model_dump(by_alias=True, exclude_none=True)
    if meta:
        console.print(Panel(
            "\n".join(f"[bold]{key}:[/bold] {value}" for key, value in meta.items()),
            title=f"{sku}",
            border_style="blue",
        ))

    recommendation = calculator.recommend(calc.cclist, speed, load)
    if recommendation is None:
        console.print(f"[yellow]No recommendation for speed '{speed}' and load '{load}'[/yellow]")
        return

    marker = "exact load" if recommendation.exact_match else f"covers {load}"
    console.print(
        f"Speed [cyan]{recommendation.speed}[/cyan], load [cyan]{recommendation.load_label}[/cyan] "
        f"({marker}): [bold green]{recommendation.pressure_label} bar[/bold green]"
    )


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """
    Runs the HTTP API.
    """
    import uvicorn

    uvicorn.run(
        "storefront.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command("version")
def version():
    from storefront import __version__

    console.print(f"[bold blue]Agro Tyre Storefront[/bold blue] v{__version__}")


# DISPLAY HELPERS

def _display_products(items: list[Product], title: str):
    """Products as a Rich table (first 20 rows)."""
    table = Table(title=title)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="white", width=40, overflow="fold")
    table.add_column("Size", style="cyan", width=16)
    table.add_column("Price", justify="right", style="green", width=10)
    table.add_column("Availability", style="yellow", width=14)

    for product in items[:20]:
        table.add_row(
            str(product.id),
            product.display_name[:40],
            product.size or "",
            str(product.regular_price) if product.regular_price is not None else "N/A",
            product.warehouse or "",
        )

    console.print(table)

    if len(items) > 20:
        console.print(f"[dim]... and {len(items) - 20} more[/dim]")


# ENTRY POINT

def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
