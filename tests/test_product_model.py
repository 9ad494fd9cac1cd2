# tests/test_product_model.py

"""Tests for the product, quote and banner dataclasses."""

import base64
import dataclasses
import unittest

from src.models.banner import BannerAsset
from src.models.product import PriceQuote, ProductInfo, ProductQuery


class TestProductModels(unittest.TestCase):
    """ProductQuery, PriceQuote and ProductInfo."""

    def test_query_hint_defaults_to_none(self) -> None:
        """The product-name hint is optional."""
        self.assertIsNone(ProductQuery(barcode="880106").product_name_hint)

    def test_quote_is_immutable(self) -> None:
        """Quotes cannot be changed once received."""
        quote = PriceQuote(store="A", price=1.0, url="https://a")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            quote.price = 2.0  # type: ignore[misc]

    def test_info_defaults_to_no_prices(self) -> None:
        """ProductInfo without quotes has an empty tuple."""
        info = ProductInfo(product_name="X", product_description="Y")
        self.assertEqual(info.prices, ())

    def test_equality(self) -> None:
        """Two infos with identical fields are equal."""
        quotes = (PriceQuote(store="A", price=1.0, url="https://a"),)
        a = ProductInfo("X", "Y", quotes)
        b = ProductInfo("X", "Y", quotes)
        self.assertEqual(a, b)


class TestBannerAsset(unittest.TestCase):
    """BannerAsset helpers."""

    def setUp(self) -> None:
        """Build a small JPEG banner."""
        self.raw = b"\xff\xd8\xff jpeg bytes"
        self.banner = BannerAsset(
            product_name="Tea",
            price=18000.0,
            mime_type="image/jpeg",
            data=base64.b64encode(self.raw).decode(),
        )

    def test_data_uri(self) -> None:
        """The data URI combines MIME type and payload."""
        self.assertEqual(
            self.banner.data_uri,
            f"data:image/jpeg;base64,{self.banner.data}",
        )

    def test_to_bytes(self) -> None:
        """The payload decodes to the original bytes."""
        self.assertEqual(self.banner.to_bytes(), self.raw)

    def test_file_extension(self) -> None:
        """The extension follows the MIME type."""
        self.assertIn(self.banner.file_extension, (".jpg", ".jpeg", ".jpe"))

    def test_unknown_mime_falls_back_to_png(self) -> None:
        """Unknown MIME types get a .png extension."""
        banner = dataclasses.replace(self.banner, mime_type="image/x-unknown")
        self.assertEqual(banner.file_extension, ".png")


if __name__ == "__main__":
    unittest.main()
