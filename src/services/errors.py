# src/services/errors.py

"""Exception types raised by the Gemini client and product gateway."""


class GatewayError(Exception):
    """A failed gateway call, carrying the message shown to the user.

    The underlying cause is chained (``raise ... from exc``) and logged,
    but never displayed.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GeminiAPIError(Exception):
    """The API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API returned HTTP {status_code}: {body[:200]}")


class ResponseShapeError(ValueError):
    """The reply did not parse as JSON or lacked a required field."""


class NoImageDataError(Exception):
    """An image request succeeded but carried no inline image payload."""


class MissingAPIKeyError(RuntimeError):
    """No Gemini API key was found in the environment."""
