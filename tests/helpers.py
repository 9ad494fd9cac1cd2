# tests/helpers.py

"""Builders for canned replies and stub gateways used across tests."""

import base64
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from google.genai import types

from src.models.banner import BannerAsset
from src.models.product import PriceQuote, ProductInfo

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def price_entries(count: int) -> list[dict[str, Any]]:
    """Return *count* raw price entries as the API would send them."""
    return [
        {
            "store": f"Store {i}",
            "price": 10000.0 + i,
            "url": f"https://shop{i}.example.com/p/1",
        }
        for i in range(1, count + 1)
    ]


def product_reply(count: int = 3, **overrides: Any) -> str:
    """Return a product-info reply text with *count* price entries."""
    data: dict[str, Any] = {
        "productName": "Aurora Green Tea",
        "productDescription": "A fragrant green tea for calm mornings.",
        "prices": price_entries(count),
    }
    data.update(overrides)
    return json.dumps(data)


def tags_reply(count: int = 10) -> str:
    """Return a tag reply text with *count* tags."""
    return json.dumps({"tags": [f"tag{i}" for i in range(1, count + 1)]})


def sdk_response(*parts: types.Part) -> types.GenerateContentResponse:
    """Return a generate_content response with one candidate."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=list(parts))
            )
        ]
    )


def image_response(
    data: bytes = PNG_BYTES, mime_type: str = "image/png"
) -> types.GenerateContentResponse:
    """Return a response carrying one inline image."""
    return sdk_response(
        types.Part(inline_data=types.Blob(mime_type=mime_type, data=data))
    )


def make_info(
    name: str = "Aurora Green Tea",
    description: str = "A fragrant green tea.",
    quotes: int = 2,
) -> ProductInfo:
    """Return a ready-made ProductInfo."""
    return ProductInfo(
        product_name=name,
        product_description=description,
        prices=tuple(
            PriceQuote(
                store=f"Store {i}",
                price=1000.0 * i,
                url=f"https://shop{i}.example.com",
            )
            for i in range(1, quotes + 1)
        ),
    )


def make_banner(
    name: str = "Aurora Green Tea", price: float = 18000.0
) -> BannerAsset:
    """Return a ready-made BannerAsset."""
    return BannerAsset(
        product_name=name,
        price=price,
        mime_type="image/png",
        data=base64.b64encode(PNG_BYTES).decode(),
    )


def stub_gateway(
    info: ProductInfo | None = None,
    tags: list[str] | None = None,
    banner: BannerAsset | None = None,
) -> MagicMock:
    """Return a gateway double whose coroutines resolve to canned results."""
    gateway = MagicMock()
    gateway.fetch_product_info = AsyncMock(return_value=info or make_info())
    gateway.generate_tags = AsyncMock(
        return_value=tags if tags is not None else ["tea", "green", "calm"]
    )
    gateway.generate_banner = AsyncMock(return_value=banner or make_banner())
    return gateway
