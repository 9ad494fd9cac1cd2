# src/services/workbench.py

"""State-owning controller behind the TUI and the headless CLI.

Each user action is a fixed sequence: validate, mark its slot in flight,
await the gateway, then store the result or the error and clear the
flag.  The three slots (prices, tags, banner) never share a flag.

Every slot also carries a request generation.  A settlement whose
generation is no longer the latest for its slot is dropped, so a slow
stale call cannot overwrite fresher state.  A new search bumps the tag
and banner generations as well, since it discards their results.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from src.filters.pricing import is_numeric_text, optimal_price
from src.models.banner import BannerAsset
from src.models.product import ProductInfo, ProductQuery
from src.services.errors import GatewayError
from src.services.product_gateway import ProductGateway

logger = logging.getLogger("price_banner.workbench")

BARCODE_REQUIRED = "Please enter a barcode."
TAGS_NEED_PRODUCT = "Product information is required to generate tags."
BANNER_NEEDS_PRICE = (
    "Product information and a valid sale price are required "
    "to generate a banner."
)

# Used only when something other than a GatewayError escapes the gateway
_FALLBACK_MESSAGES: dict[str, str] = {
    "prices": "Failed to fetch information.",
    "tags": "Failed to generate tags.",
    "banner": "Failed to generate the banner.",
}

AMOUNT_FIELDS: tuple[str, ...] = ("cost", "shipping", "margin")


@dataclass
class LoadingState:
    """One independent in-flight flag per async action."""

    prices: bool = False
    tags: bool = False
    banner: bool = False


class PricingWorkbench:
    """Holds all session state and runs the three gateway actions."""

    def __init__(
        self,
        gateway: ProductGateway,
        on_change: Callable[[], None] | None = None,
        barcode: str = "",
    ) -> None:
        self.gateway = gateway
        self.on_change = on_change

        self.barcode: str = barcode
        self.product_name_hint: str = ""
        self.amounts: dict[str, str] = {name: "" for name in AMOUNT_FIELDS}

        self.product_info: ProductInfo | None = None
        self.tags: list[str] | None = None
        self.banner: BannerAsset | None = None
        self.loading = LoadingState()
        self.error: str | None = None

        self._generations: dict[str, int] = {
            "prices": 0,
            "tags": 0,
            "banner": 0,
        }

    # ── Derived state ────────────────────────────────────

    @property
    def optimal_price(self) -> float:
        """Cost + shipping + margin from the current text fields."""
        return optimal_price(
            self.amounts["cost"],
            self.amounts["shipping"],
            self.amounts["margin"],
        )

    @property
    def query(self) -> ProductQuery:
        """The lookup request built from the current inputs."""
        hint = self.product_name_hint.strip()
        return ProductQuery(
            barcode=self.barcode.strip(),
            product_name_hint=hint or None,
        )

    # ── Inputs ───────────────────────────────────────────

    def set_amount(self, field: str, text: str) -> bool:
        """Update a pricing field; reject text that is not numeric.

        Returns False (and keeps the previous value) on rejection.
        """
        if field not in self.amounts:
            raise KeyError(f"Unknown pricing field: {field}")
        if not is_numeric_text(text):
            logger.debug("Rejected %s input %r", field, text)
            return False
        self.amounts[field] = text
        self._notify()
        return True

    # ── Private helpers ──────────────────────────────────

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _begin(self, slot: str) -> int:
        self._generations[slot] += 1
        return self._generations[slot]

    def _is_current(self, slot: str, generation: int) -> bool:
        return self._generations[slot] == generation

    def _failure_message(self, slot: str, exc: Exception) -> str:
        if isinstance(exc, GatewayError):
            return exc.message
        logger.error(
            "Unexpected %s failure: %s", slot, exc, exc_info=exc
        )
        return _FALLBACK_MESSAGES[slot]

    def _reject(self, message: str) -> bool:
        logger.info("Validation failed: %s", message)
        self.error = message
        self._notify()
        return False

    # ── Actions ──────────────────────────────────────────

    async def search(self) -> bool:
        """Look up the barcode; resets every previous result first."""
        query = self.query
        self.error = None
        if not query.barcode:
            return self._reject(BARCODE_REQUIRED)

        generation = self._begin("prices")
        self._begin("tags")
        self._begin("banner")
        self.product_info = None
        self.tags = None
        self.banner = None
        self.loading.prices = True
        self.loading.tags = False
        self.loading.banner = False
        self._notify()

        ok = False
        try:
            info = await self.gateway.fetch_product_info(
                query.barcode, query.product_name_hint
            )
        except Exception as exc:
            if self._is_current("prices", generation):
                self.error = self._failure_message("prices", exc)
        else:
            if self._is_current("prices", generation):
                self.product_info = info
                ok = True
            else:
                logger.info(
                    "Discarded stale product lookup for '%s'", query.barcode
                )
        finally:
            if self._is_current("prices", generation):
                self.loading.prices = False
                self._notify()
        return ok

    async def generate_tags(self) -> bool:
        """Generate tags for the current product."""
        self.error = None
        info = self.product_info
        if info is None or not info.product_name or not info.product_description:
            return self._reject(TAGS_NEED_PRODUCT)

        generation = self._begin("tags")
        self.loading.tags = True
        self._notify()

        ok = False
        try:
            tags = await self.gateway.generate_tags(
                info.product_name, info.product_description
            )
        except Exception as exc:
            if self._is_current("tags", generation):
                self.error = self._failure_message("tags", exc)
        else:
            if self._is_current("tags", generation):
                self.tags = tags
                ok = True
            else:
                logger.info("Discarded stale tags for '%s'", info.product_name)
        finally:
            if self._is_current("tags", generation):
                self.loading.tags = False
                self._notify()
        return ok

    async def generate_banner(self) -> bool:
        """Generate a banner for the current product and sale price."""
        self.error = None
        info = self.product_info
        price = self.optimal_price
        if info is None or not info.product_name or price <= 0:
            return self._reject(BANNER_NEEDS_PRICE)

        generation = self._begin("banner")
        self.loading.banner = True
        self._notify()

        ok = False
        try:
            banner = await self.gateway.generate_banner(
                info.product_name, price
            )
        except Exception as exc:
            if self._is_current("banner", generation):
                self.error = self._failure_message("banner", exc)
        else:
            if self._is_current("banner", generation):
                self.banner = banner
                ok = True
            else:
                logger.info(
                    "Discarded stale banner for '%s'", info.product_name
                )
        finally:
            if self._is_current("banner", generation):
                self.loading.banner = False
                self._notify()
        return ok
