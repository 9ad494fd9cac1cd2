# src/cli/runner.py

"""Headless runner: the TUI's workbench driven from the command line."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.filters.pricing import format_price
from src.models.product import ProductInfo
from src.services.product_gateway import ProductGateway
from src.services.workbench import PricingWorkbench

logger = logging.getLogger("price_banner.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _result_to_dict(
    workbench: PricingWorkbench, info: ProductInfo
) -> dict[str, object]:
    """Serialise the workbench results to a plain dict for JSON output."""
    return {
        "productName": info.product_name,
        "productDescription": info.product_description,
        "prices": [
            {"store": q.store, "price": q.price, "url": q.url}
            for q in info.prices
        ],
        "optimalPrice": workbench.optimal_price,
        "tags": workbench.tags,
    }


def _print_table(workbench: PricingWorkbench, info: ProductInfo) -> None:
    """Render the lookup as Rich tables on stdout."""
    console = Console()
    console.print(f"[bold cyan]{escape(info.product_name)}[/bold cyan]")
    console.print(f"[dim]{escape(info.product_description)}[/dim]")

    table = Table(
        title="Lowest Prices (up to 5)",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Store")
    table.add_column("Price", justify="right", style="green")
    table.add_column("URL", overflow="fold", style="dim")
    for idx, q in enumerate(info.prices, 1):
        table.add_row(str(idx), q.store, format_price(q.price), q.url)
    console.print(table)

    console.print(
        f"Optimal sale price: [bold green]"
        f"{format_price(max(workbench.optimal_price, 0))}[/bold green]"
    )
    if workbench.tags:
        console.print(escape(" ".join(f"#{t}" for t in workbench.tags)))


def _write_banner(workbench: PricingWorkbench, banner_path: str) -> bool:
    """Write the decoded banner image to *banner_path*."""
    banner = workbench.banner
    if banner is None:
        return False
    path = Path(banner_path)
    try:
        path.write_bytes(banner.to_bytes())
    except OSError as exc:
        logger.error("Banner write failed: %s", exc, exc_info=True)
        _err.print(f"[red]Banner write failed: {exc}[/red]")
        return False
    _err.print(f"[dim]Saved banner → {path}[/dim]")
    return True


async def cli_lookup(
    gateway: ProductGateway,
    barcode: str,
    product_name: str | None,
    cost: str,
    shipping: str,
    margin: str,
    with_tags: bool,
    banner_path: str | None,
    output_format: str,
) -> int:
    """Run a headless lookup and return an exit code (0=ok, 1=fail)."""
    workbench = PricingWorkbench(gateway, barcode=barcode)
    workbench.product_name_hint = product_name or ""
    for field, value in (
        ("cost", cost),
        ("shipping", shipping),
        ("margin", margin),
    ):
        if not workbench.set_amount(field, value):
            _err.print(f"[red]Invalid {field}: {value!r}[/red]")
            return 1

    _err.print(f"[bold]Looking up:[/bold] {barcode}")
    if not await workbench.search():
        _err.print(f"[red]Error: {workbench.error}[/red]")
        return 1

    info = workbench.product_info
    if info is None:
        return 1
    _err.print(
        f"[green]✓ {escape(info.product_name)}: "
        f"{len(info.prices)} price quote(s)[/green]"
    )

    exit_code = 0
    if with_tags and not await workbench.generate_tags():
        _err.print(f"[red]Error: {workbench.error}[/red]")
        exit_code = 1

    if banner_path is not None:
        if await workbench.generate_banner():
            if not _write_banner(workbench, banner_path):
                exit_code = 1
        else:
            _err.print(f"[red]Error: {workbench.error}[/red]")
            exit_code = 1

    if output_format == "table":
        _print_table(workbench, info)
    else:
        json.dump(
            _result_to_dict(workbench, info),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return exit_code
