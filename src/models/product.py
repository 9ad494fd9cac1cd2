# src/models/product.py

"""Product data models passed between the gateway, workbench and views."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductQuery:
    """A single lookup request typed by the user."""

    barcode: str
    product_name_hint: str | None = None


@dataclass(frozen=True)
class PriceQuote:
    """One fictional store offer for the looked-up product."""

    store: str
    price: float
    url: str


@dataclass(frozen=True)
class ProductInfo:
    """Simulated product facts plus up to five store offers."""

    product_name: str
    product_description: str
    prices: tuple[PriceQuote, ...] = field(
        default_factory=lambda: tuple[PriceQuote, ...]()
    )
