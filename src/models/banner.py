# src/models/banner.py

"""Generated promotional banner image model."""

import base64
import mimetypes
from dataclasses import dataclass


@dataclass(frozen=True)
class BannerAsset:
    """A banner image generated for a (product name, price) pair."""

    product_name: str
    price: float
    mime_type: str
    data: str  # base64 payload as returned by the API

    @property
    def data_uri(self) -> str:
        """Return the image as an embeddable ``data:`` URI."""
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        """Decode the base64 payload into raw image bytes."""
        return base64.b64decode(self.data)

    @property
    def file_extension(self) -> str:
        """Best-guess file extension for the declared MIME type."""
        return mimetypes.guess_extension(self.mime_type) or ".png"
