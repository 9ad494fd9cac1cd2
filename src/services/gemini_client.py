# src/services/gemini_client.py

"""Blocking wrapper around the ``google-genai`` client."""

import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.config.settings import Settings
from src.services.errors import GeminiAPIError, MissingAPIKeyError

logger = logging.getLogger("price_banner.gemini")


class GeminiClient:
    """Holds the API credential and one ``genai.Client``.

    Constructed once per session and handed to the gateway; it keeps no
    state besides the SDK client.  Calls are blocking, callers on the
    event loop go through ``asyncio.to_thread``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings = Settings()
        key = api_key if api_key is not None else self.settings.GEMINI_API_KEY
        if not key:
            raise MissingAPIKeyError(
                "GEMINI_API_KEY is not set. Add it to your environment "
                "or a .env file."
            )
        if timeout is None:
            timeout = self.settings.REQUEST_TIMEOUT
        http_options = types.HttpOptions(
            base_url=base_url or self.settings.GEMINI_API_BASE,
            # SDK timeouts are in milliseconds
            timeout=int(timeout * 1000) if timeout is not None else None,
        )
        self._client = genai.Client(api_key=key, http_options=http_options)

    def generate_content(
        self,
        model: str,
        prompt: str,
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        """Send a single-turn prompt and return the SDK response.

        Raises:
            GeminiAPIError: when the API answers with an error status.
        """
        logger.debug("generate_content %s (%d chars)", model, len(prompt))
        try:
            return self._client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.warning("Gemini %s answered HTTP %s", model, exc.code)
            raise GeminiAPIError(
                exc.code, str(exc.message or exc.status or "")
            ) from exc

    def generate_json(
        self,
        model: str,
        prompt: str,
        schema: dict[str, Any],
    ) -> str:
        """Request schema-constrained JSON and return the reply text."""
        response = self.generate_content(
            model,
            prompt,
            types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text or ""

    def generate_image(
        self, model: str, prompt: str
    ) -> types.GenerateContentResponse:
        """Request an image-only reply."""
        return self.generate_content(
            model,
            prompt,
            types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )

    def close(self) -> None:
        """Release the SDK's HTTP connections."""
        self._client.close()


def first_part(response: types.GenerateContentResponse) -> types.Part | None:
    """Return the first content part of the first candidate, if any."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None
    return content.parts[0]
