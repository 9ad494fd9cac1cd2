# src/ui/app.py

"""Terminal UI for the price_banner workbench."""

import logging
import tempfile
import webbrowser
from pathlib import Path
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    LoadingIndicator,
    Static,
)

from src.config.settings import Settings
from src.filters.pricing import format_price
from src.models.banner import BannerAsset
from src.models.product import ProductInfo
from src.services.gemini_client import GeminiClient
from src.services.product_gateway import ProductGateway
from src.services.workbench import PricingWorkbench

logger = logging.getLogger("price_banner.ui")

# Pricing input id -> workbench field
_AMOUNT_INPUTS: dict[str, str] = {
    "cost_input": "cost",
    "shipping_input": "shipping",
    "margin_input": "margin",
}

_NUMERIC_RESTRICT = r"\d*\.?\d*"


class PriceBannerApp(App[object]):
    """Barcode lookup, sale price, tags and banner in one screen."""

    CSS_PATH = "styles.tcss"
    TITLE = "Optimal Price & Banner Generator"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("c", "copy_tags", "Copy Tags"),
        Binding("o", "open_banner", "Open Banner"),
    ]

    def __init__(self, gateway: ProductGateway | None = None) -> None:
        super().__init__()
        self.settings = Settings()
        # Only a client built here is closed on exit
        self._client: GeminiClient | None = None
        if gateway is None:
            self._client = GeminiClient()
            gateway = ProductGateway(self._client)
        self.workbench = PricingWorkbench(
            gateway,
            on_change=self.refresh_view,
            barcode=self.settings.DEFAULT_BARCODE,
        )
        self._banner_file: Path | None = None
        self._table_info: ProductInfo | None = None
        self._view_ready = False

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Horizontal(
            # Left column: inputs
            Vertical(
                Label("1. Product information"),
                Horizontal(
                    Input(
                        value=self.workbench.barcode,
                        placeholder="Barcode",
                        id="barcode_input",
                    ),
                    Input(
                        placeholder="Product name (optional)",
                        id="name_input",
                    ),
                    Button("Search", variant="primary", id="search_btn"),
                    id="search_bar",
                ),
                Container(
                    Label("2. Sales inputs"),
                    Label("Cost price"),
                    Input(
                        placeholder="10000",
                        restrict=_NUMERIC_RESTRICT,
                        id="cost_input",
                    ),
                    Label("Shipping fee"),
                    Input(
                        placeholder="3000",
                        restrict=_NUMERIC_RESTRICT,
                        id="shipping_input",
                    ),
                    Label("Desired margin"),
                    Input(
                        placeholder="5000",
                        restrict=_NUMERIC_RESTRICT,
                        id="margin_input",
                    ),
                    Button(
                        "3. Generate tags", variant="warning", id="tags_btn"
                    ),
                    Label("Optimal sale price"),
                    Static(format_price(0), id="optimal_price"),
                    Button(
                        "4. Generate banner",
                        variant="success",
                        id="banner_btn",
                    ),
                    id="sale_panel",
                ),
                id="input_column",
            ),
            # Right column: results
            Vertical(
                Label("Results", id="results_title"),
                Static("", id="error"),
                LoadingIndicator(id="prices_loader"),
                Static("", id="product_info"),
                cast(
                    DataTable[str | Text],
                    DataTable(
                        id="price_table",
                        zebra_stripes=True,
                        cursor_type="row",
                    ),
                ),
                LoadingIndicator(id="tags_loader"),
                Static("", id="tags"),
                LoadingIndicator(id="banner_loader"),
                Static("", id="banner"),
                Static(
                    "Search for a barcode to get started.", id="placeholder"
                ),
                id="results_column",
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the price table and paint the initial state."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#price_table", DataTable),
        )
        table.add_columns("Store", "Price", "URL")
        self.populate_table()
        self._view_ready = True
        self.refresh_view()

    def on_unmount(self) -> None:
        """Remove the session's banner temp file and close the client."""
        if self._banner_file is not None:
            self._banner_file.unlink(missing_ok=True)
            self._banner_file = None
        if self._client is not None:
            self._client.close()
            self._client = None

    # ── Rendering ────────────────────────────────────────

    def refresh_view(self) -> None:
        """Re-render every widget from the workbench state."""
        if not self._view_ready:
            return
        wb = self.workbench
        info = wb.product_info

        error = self.query_one("#error", Static)
        error.update(Text(wb.error or "", style="bold red"))
        error.display = wb.error is not None

        self.query_one("#prices_loader").display = wb.loading.prices
        self.query_one("#tags_loader").display = wb.loading.tags
        self.query_one("#banner_loader").display = wb.loading.banner

        self.query_one("#search_btn", Button).disabled = wb.loading.prices
        self.query_one("#tags_btn", Button).disabled = wb.loading.tags
        self.query_one("#banner_btn", Button).disabled = (
            wb.loading.banner or wb.optimal_price <= 0
        )
        self.query_one("#sale_panel").display = info is not None
        self.query_one("#optimal_price", Static).update(
            format_price(wb.optimal_price if wb.optimal_price > 0 else 0)
        )

        self.query_one("#placeholder").display = (
            not wb.loading.prices and info is None and wb.error is None
        )

        product = self.query_one("#product_info", Static)
        product.display = info is not None
        if info is not None:
            product.update(
                Text.assemble(
                    (info.product_name, "bold cyan"),
                    "\n",
                    (info.product_description, "dim"),
                )
            )
        if info is not self._table_info:
            self.populate_table()

        tags = self.query_one("#tags", Static)
        tags.display = wb.tags is not None
        if wb.tags is not None:
            tags.update(
                Text(" ".join(f"#{t}" for t in wb.tags), style="cyan")
            )

        banner = self.query_one("#banner", Static)
        banner.display = wb.banner is not None
        if wb.banner is not None:
            banner.update(Text(self._describe_banner(wb.banner)))

    def populate_table(self) -> None:
        """Fill the price table with the current store offers."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#price_table", DataTable),
        )
        table.clear()
        info = self.workbench.product_info
        self._table_info = info
        table.display = info is not None
        if info is None:
            return
        for quote in info.prices:
            table.add_row(
                quote.store,
                Text(format_price(quote.price), style="bold green"),
                quote.url,
            )

    @staticmethod
    def _describe_banner(banner: BannerAsset) -> str:
        size_kb = len(banner.to_bytes()) / 1024
        return (
            f"Banner ready: {banner.mime_type}, {size_kb:.0f} KB "
            f"({banner.product_name} at {format_price(banner.price)}). "
            "Press 'o' to open it."
        )

    # ── Events ───────────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Mirror text inputs into the workbench."""
        input_id = event.input.id or ""
        if input_id == "barcode_input":
            self.workbench.barcode = event.value
        elif input_id == "name_input":
            self.workbench.product_name_hint = event.value
        elif input_id in _AMOUNT_INPUTS:
            field = _AMOUNT_INPUTS[input_id]
            if not self.workbench.set_amount(field, event.value):
                event.input.value = self.workbench.amounts[field]

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Dispatch each action as its own worker so slots can overlap."""
        if event.button.id == "search_btn":
            self.run_worker(self.perform_search(), group="prices")
        elif event.button.id == "tags_btn":
            self.run_worker(self.perform_generate_tags(), group="tags")
        elif event.button.id == "banner_btn":
            self.run_worker(self.perform_generate_banner(), group="banner")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the barcode or name input starts a search."""
        if event.input.id in ("barcode_input", "name_input"):
            self.run_worker(self.perform_search(), group="prices")

    async def perform_search(self) -> None:
        """Look up the current barcode."""
        await self.workbench.search()

    async def perform_generate_tags(self) -> None:
        """Generate tags for the displayed product."""
        await self.workbench.generate_tags()

    async def perform_generate_banner(self) -> None:
        """Generate a banner for the displayed product and price."""
        await self.workbench.generate_banner()

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the selected store's URL in the default browser."""
        info = self.workbench.product_info
        if info is not None and 0 <= event.cursor_row < len(info.prices):
            webbrowser.open(info.prices[event.cursor_row].url)

    # ── Actions ──────────────────────────────────────────

    def action_copy_tags(self) -> None:
        """Copy the generated tags to the clipboard."""
        tags = self.workbench.tags
        if not tags:
            self.notify("No tags to copy", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(" ".join(f"#{t}" for t in tags))
            self.notify("Tags copied")
        except Exception:
            logger.error("Failed to copy tags to clipboard", exc_info=True)
            self.notify("Install pyperclip", severity="warning")

    def action_open_banner(self) -> None:
        """Write the banner to a session temp file and open it."""
        banner = self.workbench.banner
        if banner is None:
            self.notify("No banner generated yet", severity="warning")
            return
        try:
            if self._banner_file is not None:
                self._banner_file.unlink(missing_ok=True)
            with tempfile.NamedTemporaryFile(
                prefix="price_banner_",
                suffix=banner.file_extension,
                delete=False,
            ) as fh:
                fh.write(banner.to_bytes())
            self._banner_file = Path(fh.name)
            webbrowser.open(self._banner_file.as_uri())
            logger.info("Opened banner from %s", self._banner_file)
        except Exception as e:
            logger.error("Failed to open banner", exc_info=True)
            self.notify(f"Could not open banner: {e}", severity="error")
