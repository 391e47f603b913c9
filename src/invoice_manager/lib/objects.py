"""
JSON serialization helpers.

Invoice payloads carry Decimal amounts and date values that the json
module cannot encode on its own. to_json writes Decimals as JSON numbers
with every digit kept, and from_json reads non-integer numbers back as
Decimal, so amounts survive a save/load or export/import unchanged.
"""

import json
import re
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

# json.dumps cannot emit raw number text from a default hook, so Decimals
# are written as tagged strings first and unquoted afterwards
_DECIMAL_TAG = "\x00decimal:"
_TAGGED_DECIMAL = re.compile(r'"\\u0000decimal:(-?[0-9]+(?:\.[0-9]+)?)"')


def to_json(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to a JSON string.

    Args:
        obj: Object to serialize.
        indent: Optional indentation for pretty printing.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    text = json.dumps(obj, default=_default_serializer, indent=indent, ensure_ascii=False)
    return _TAGGED_DECIMAL.sub(r"\1", text)


def from_json(text: str | bytes) -> Any:
    """
    Parse JSON text, decoding bytes as UTF-8 first.

    Numbers with a fraction or exponent are returned as Decimal.

    Raises:
        ValueError: If the payload is not valid UTF-8 or not valid JSON.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8-sig")
    return json.loads(text, parse_float=Decimal)


def decimal_text(value: Decimal) -> str:
    """
    Plain JSON number text for a finite Decimal.

    Integral values are written without a fraction and trailing zeros
    are dropped, so Decimal("1500.00") is "1500" and Decimal("2.50") is
    "2.5". No digits are rounded away.
    """
    if value == value.to_integral_value():
        return str(int(value))
    return format(value, "f").rstrip("0")


def _default_serializer(obj: Any) -> Any:
    """Encode the types json.dumps rejects by default."""
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            return None
        return _DECIMAL_TAG + decimal_text(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)
