# src/filters/response_validator.py

"""Post-parse validation of Gemini replies into domain objects."""

import base64
import json
import logging
import math
from typing import Any

from google.genai import types

from src.config.settings import Settings
from src.models.banner import BannerAsset
from src.models.product import PriceQuote, ProductInfo
from src.services.errors import NoImageDataError, ResponseShapeError

logger = logging.getLogger("price_banner.filters")


def _load_object(text: str) -> dict[str, Any]:
    """Decode reply text that must hold a JSON object."""
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as exc:
        raise ResponseShapeError(f"Reply is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseShapeError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ResponseShapeError(f"{where}: '{key}' must be a string")
    return value


def _require_price(data: dict[str, Any], where: str) -> float:
    value = data.get("price")
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseShapeError(f"{where}: 'price' must be a number")
    if not math.isfinite(value):
        raise ResponseShapeError(f"{where}: 'price' must be finite")
    if value < 0:
        raise ResponseShapeError(f"{where}: 'price' must not be negative")
    return float(value)


class ResponseValidator:
    """Turn loosely-typed replies into validated domain objects."""

    @staticmethod
    def product_info(text: str) -> ProductInfo:
        """Validate a product-info reply.

        ``prices`` is cut to ``MAX_PRICE_QUOTES`` entries in received
        order before the entries are checked.
        """
        data = _load_object(text)
        name = _require_str(data, "productName", "product")
        description = _require_str(data, "productDescription", "product")

        raw_prices = data.get("prices")
        if not isinstance(raw_prices, list):
            raise ResponseShapeError("product: 'prices' must be an array")

        limit = Settings.MAX_PRICE_QUOTES
        if len(raw_prices) > limit:
            logger.info(
                "Truncating %d price quotes to %d", len(raw_prices), limit
            )
            raw_prices = raw_prices[:limit]

        quotes: list[PriceQuote] = []
        for idx, entry in enumerate(raw_prices):
            where = f"prices[{idx}]"
            if not isinstance(entry, dict):
                raise ResponseShapeError(f"{where} must be an object")
            quotes.append(
                PriceQuote(
                    store=_require_str(entry, "store", where),
                    price=_require_price(entry, where),
                    url=_require_str(entry, "url", where),
                )
            )

        return ProductInfo(
            product_name=name,
            product_description=description,
            prices=tuple(quotes),
        )

    @staticmethod
    def tags(text: str) -> list[str]:
        """Validate a tag reply; a missing ``tags`` array is an error."""
        data = _load_object(text)
        raw_tags = data.get("tags")
        if not isinstance(raw_tags, list):
            raise ResponseShapeError("Invalid tag format received from API.")

        limit = Settings.MAX_TAGS
        if len(raw_tags) > limit:
            logger.info("Truncating %d tags to %d", len(raw_tags), limit)
            raw_tags = raw_tags[:limit]

        for idx, tag in enumerate(raw_tags):
            if not isinstance(tag, str):
                raise ResponseShapeError(f"tags[{idx}] must be a string")
        return list(raw_tags)

    @staticmethod
    def banner(
        part: types.Part | None,
        product_name: str,
        price: float,
    ) -> BannerAsset:
        """Extract the inline image from the first content part."""
        inline = part.inline_data if part is not None else None
        if inline is None or not inline.data:
            raise NoImageDataError("No image data received from API.")
        return BannerAsset(
            product_name=product_name,
            price=price,
            mime_type=inline.mime_type or "image/png",
            data=base64.b64encode(inline.data).decode("utf-8"),
        )
