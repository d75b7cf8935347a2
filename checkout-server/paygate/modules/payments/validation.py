"""Stateless input clean-up applied before values reach the ledger."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from .exceptions import ValidationError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_MARKUP_CHARS = re.compile(r"[<>\"'`]")
# plain decimal with at most two places; the ledger stores Numeric(12, 2)
_PRICE_PATTERN = re.compile(r"[0-9]+(\.[0-9]{1,2})?")


def sanitize_text(value: Any) -> str:
    if value is None:
        return ""
    text = _CONTROL_CHARS.sub("", str(value))
    return _MARKUP_CHARS.sub("", text).strip()


def parse_price(raw: Any) -> Decimal:
    """Parse a user-entered price.

    Only unsigned decimal literals with up to two fractional digits are
    accepted. Anything else, including input that would only become numeric
    after stripping characters, raises ``ValidationError``.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError("price is required")
    text = str(raw).strip()
    if not _PRICE_PATTERN.fullmatch(text):
        raise ValidationError(f"price is not a number with at most two decimals: {raw!r}")
    return Decimal(text)


def validate_amount(raw: Any, minimum: Decimal, maximum: Decimal) -> Decimal:
    price = parse_price(raw)
    if price < minimum or price > maximum:
        raise ValidationError(f"price {price} outside [{minimum}, {maximum}]")
    return price
