# src/services/product_gateway.py

"""The three Gemini-backed operations: product lookup, tags, banner."""

import asyncio
import logging

from src.config.settings import Settings
from src.filters.pricing import format_price
from src.filters.response_validator import ResponseValidator
from src.models.banner import BannerAsset
from src.models.product import ProductInfo
from src.models.schemas import PRODUCT_INFO_SCHEMA, TAGS_SCHEMA
from src.services.errors import GatewayError
from src.services.gemini_client import GeminiClient, first_part

logger = logging.getLogger("price_banner.gateway")

PRODUCT_INFO_FAILED = (
    "Failed to fetch product information. "
    "Please check the barcode and try again."
)
TAGS_FAILED = "Failed to generate product tags. Please try again."
BANNER_FAILED = (
    "Failed to generate the promotional banner. Please try again later."
)


def build_product_prompt(barcode: str, product_name_hint: str | None) -> str:
    """Instruction for the product information simulator."""
    name_line = (
        f'\n- Product Name: "{product_name_hint}"' if product_name_hint else ""
    )
    return (
        "You are a product information simulator.\n"
        "The user has provided the following information:\n"
        f'- Barcode: "{barcode}"{name_line}\n\n'
        "Your task is to act as a product information and price "
        "comparison engine.\n"
        "1. If a product name is provided, use it. If not, invent a "
        "plausible product name based on the barcode.\n"
        "2. Provide a brief, engaging description for the product.\n"
        f"3. Find and list up to {Settings.MAX_PRICE_QUOTES} fictional "
        "online stores with their lowest prices and plausible URLs for "
        "this product.\n\n"
        "Respond strictly in JSON format according to the provided schema. "
        "Be creative with the product details."
    )


def build_tags_prompt(product_name: str, product_description: str) -> str:
    """Instruction asking for SEO-friendly tags."""
    return (
        f"Generate exactly {Settings.MAX_TAGS} optimal, SEO-friendly tags "
        "for the following product. The tags should be relevant, concise, "
        "and useful for e-commerce listings and marketing.\n"
        f'Product Name: "{product_name}"\n'
        f'Description: "{product_description}"\n'
        "Respond strictly in JSON format according to the provided schema."
    )


def build_banner_prompt(product_name: str, price: float) -> str:
    """Instruction describing the promotional banner image."""
    return (
        "Create an eye-catching promotional banner for an e-commerce "
        f'website. The product is "{product_name}". The price is '
        f'"{format_price(price)}". The banner should be vibrant, modern, '
        "and professional, designed to attract customers. The price should "
        "be prominent and easy to read."
    )


class ProductGateway:
    """Async facade over :class:`GeminiClient` for the workbench.

    Every failure (transport, HTTP status, bad JSON, wrong shape, missing
    image) is logged with its traceback and re-raised as a
    :class:`GatewayError` carrying one short message per operation.
    Nothing is retried.
    """

    def __init__(self, client: GeminiClient) -> None:
        self.client = client
        self.settings = Settings()

    async def fetch_product_info(
        self,
        barcode: str,
        product_name_hint: str | None = None,
    ) -> ProductInfo:
        """Simulate product facts and up to five store prices."""
        prompt = build_product_prompt(barcode, product_name_hint)
        try:
            text = await asyncio.to_thread(
                self.client.generate_json,
                self.settings.TEXT_MODEL,
                prompt,
                PRODUCT_INFO_SCHEMA,
            )
            info = ResponseValidator.product_info(text)
        except Exception as exc:
            logger.error(
                "Error fetching product info for barcode '%s': %s",
                barcode,
                exc,
                exc_info=True,
            )
            raise GatewayError(PRODUCT_INFO_FAILED) from exc

        logger.info(
            "Fetched '%s' with %d price quote(s)",
            info.product_name,
            len(info.prices),
        )
        return info

    async def generate_tags(
        self,
        product_name: str,
        product_description: str,
    ) -> list[str]:
        """Generate up to ten marketing tags."""
        prompt = build_tags_prompt(product_name, product_description)
        try:
            text = await asyncio.to_thread(
                self.client.generate_json,
                self.settings.TEXT_MODEL,
                prompt,
                TAGS_SCHEMA,
            )
            tags = ResponseValidator.tags(text)
        except Exception as exc:
            logger.error(
                "Error generating tags for '%s': %s",
                product_name,
                exc,
                exc_info=True,
            )
            raise GatewayError(TAGS_FAILED) from exc

        logger.info("Generated %d tag(s) for '%s'", len(tags), product_name)
        return tags

    async def generate_banner(
        self,
        product_name: str,
        price: float,
    ) -> BannerAsset:
        """Generate a promotional banner showing name and price."""
        prompt = build_banner_prompt(product_name, price)
        try:
            body = await asyncio.to_thread(
                self.client.generate_image,
                self.settings.IMAGE_MODEL,
                prompt,
            )
            banner = ResponseValidator.banner(
                first_part(body), product_name, price
            )
        except Exception as exc:
            logger.error(
                "Error generating banner for '%s': %s",
                product_name,
                exc,
                exc_info=True,
            )
            raise GatewayError(BANNER_FAILED) from exc

        logger.info(
            "Generated %s banner for '%s' at %s",
            banner.mime_type,
            product_name,
            format_price(price),
        )
        return banner
