"""
Type coercion module for html_extractor.

Converts raw strings pulled from the document into typed values. Coercion is
total: every (raw, type) pair yields either a value or ``UNAVAILABLE``.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Optional, Union

from .config import ValueType

logger = logging.getLogger(__name__)

TypedValue = Optional[Union[bool, int, float, str]]

# Sentinel for "selector did not match" or "value not convertible"
UNAVAILABLE: TypedValue = None

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')
_FLOAT_RE = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_FLOAT_SPECIALS = {"inf", "infinity", "nan"}


def coerce_integer(raw: str) -> TypedValue:
    """Parse a base-10 signed 64-bit integer."""
    if not _INTEGER_RE.fullmatch(raw):
        return UNAVAILABLE
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        logger.debug(f"Integer out of 64-bit range: {raw}")
        return UNAVAILABLE
    return value


def coerce_float(raw: str) -> TypedValue:
    """Parse a decimal or exponential floating-point literal."""
    unsigned = raw[1:] if raw[:1] in ("+", "-") else raw
    if unsigned.lower() in _FLOAT_SPECIALS or _FLOAT_RE.fullmatch(raw):
        return float(raw)
    return UNAVAILABLE


def coerce_boolean(raw: str) -> TypedValue:
    if raw == "true":
        return True
    if raw == "false":
        return False
    return UNAVAILABLE


def coerce(raw: str, value_type: ValueType) -> TypedValue:
    """
    Convert a raw extracted string into a typed value.

    Args:
        raw: Raw string pulled from the document (empty if nothing matched)
        value_type: Declared type of the property

    Returns:
        The typed value, or UNAVAILABLE if the string does not parse
    """
    if value_type is ValueType.STRING:
        return raw
    if value_type is ValueType.INTEGER:
        return coerce_integer(raw)
    if value_type is ValueType.FLOAT:
        return coerce_float(raw)
    if value_type is ValueType.BOOLEAN:
        return coerce_boolean(raw)
    raise ValueError(f"Unsupported value type: {value_type}")


def format_value(value: TypedValue) -> str:
    """
    Render a typed value in its natural string form.

    UNAVAILABLE renders as the empty string, booleans as ``true``/``false``.
    """
    if value is UNAVAILABLE:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_float(value)
    return str(value)


def format_float(value: float) -> str:
    """Positional notation without a trailing ``.0``: 3.0 -> "3", 1e-07 -> "0.0000001"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
