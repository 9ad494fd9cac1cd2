# src/filters/pricing.py

"""Sale-price arithmetic and numeric text handling for the pricing inputs."""

import re

from src.config.settings import Settings

# Digits with at most one decimal point, nothing else (empty allowed)
_NUMERIC_TEXT = re.compile(r"\d*\.?\d*")

# Leading unsigned decimal, the part a lenient parse keeps
_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)")


def is_numeric_text(text: str) -> bool:
    """Return True if *text* is an acceptable pricing-field value."""
    return _NUMERIC_TEXT.fullmatch(text) is not None


def parse_amount(text: str | None) -> float:
    """Leniently parse a money amount typed as free text.

    The leading decimal prefix is used (``"12.5kg"`` -> 12.5); empty,
    missing or non-numeric text yields ``0.0``.  Never raises.
    """
    if not text:
        return 0.0
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def optimal_price(
    cost: str | None,
    shipping: str | None,
    margin: str | None,
) -> float:
    """Return cost + shipping + margin, each parsed leniently."""
    return parse_amount(cost) + parse_amount(shipping) + parse_amount(margin)


def format_price(value: float) -> str:
    """Format a price with thousands separators and the currency suffix.

    Whole amounts drop the decimals (``15000`` -> ``15,000원``); fractional
    amounts keep up to three significant decimals like a locale formatter.
    """
    if float(value).is_integer():
        body = f"{int(value):,}"
    else:
        body = f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"{body}{Settings.CURRENCY_SUFFIX}"
