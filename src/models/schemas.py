# src/models/schemas.py

"""Response-shape contracts sent to Gemini as ``responseSchema``.

The dialect is the OpenAPI subset accepted by the ``generateContent``
endpoint (upper-case type names).  The model is asked to honour these
shapes, but replies are still validated after parsing, see
:mod:`src.filters.response_validator`.
"""

from typing import Any

PRICE_QUOTE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "store": {
            "type": "STRING",
            "description": "The name of the online store.",
        },
        "price": {
            "type": "NUMBER",
            "description": "The price of the product.",
        },
        "url": {
            "type": "STRING",
            "description": "A plausible URL for the product page.",
        },
    },
    "required": ["store", "price", "url"],
}

PRODUCT_INFO_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "productName": {
            "type": "STRING",
            "description": "A plausible, creative name for the product.",
        },
        "productDescription": {
            "type": "STRING",
            "description": "A short, engaging description for the product.",
        },
        "prices": {
            "type": "ARRAY",
            "description": (
                "A list of up to 5 fictional online stores "
                "with their prices."
            ),
            "items": PRICE_QUOTE_SCHEMA,
        },
    },
    "required": ["productName", "productDescription", "prices"],
}

TAGS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "tags": {
            "type": "ARRAY",
            "description": (
                "A list of 10 relevant and effective tags for the product."
            ),
            "items": {
                "type": "STRING",
                "description": "A single product tag.",
            },
        },
    },
    "required": ["tags"],
}
