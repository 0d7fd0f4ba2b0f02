"""
Canonical number formatting for query-parameter values.

Numbers are written with at most 6 fractional digits, '.' as the decimal
separator, no grouping and no exponent, so the same value always produces
the same wire text regardless of host locale.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import Union

from directions_codec.core.exceptions import MalformedElementError, ValidationViolationError

MAX_FRACTION_DIGITS = 6

_QUANTUM = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

Number = Union[int, float, Decimal]


def format_decimal(value: Number) -> str:
    """
    Format a number into its canonical wire string.
    
    Floats are converted through their shortest repr before rounding, so
    0.0000125 rounds as the decimal 0.0000125 and not as its binary
    neighbour. Ties round half to even.
    
    Args:
        value: int, float or Decimal to format
        
    Returns:
        Canonical string, e.g. 5.0 -> "5", 5.1234567 -> "5.123457"
        
    Raises:
        ValidationViolationError: If value is NaN or infinite
    """
    number = _to_decimal(value)
    
    with localcontext() as ctx:
        # Room for every integral digit plus the fractional ones
        ctx.prec = max(ctx.prec, number.adjusted() + MAX_FRACTION_DIGITS + 2)
        rounded = number.quantize(_QUANTUM, rounding=ROUND_HALF_EVEN)
    
    if rounded.is_zero():
        return "0"
    
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _to_decimal(value: Number) -> Decimal:
    """Convert a supported number into a finite Decimal."""
    if isinstance(value, bool):
        raise TypeError("Booleans are not numbers on the wire")
    
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValidationViolationError(f"Cannot format non-finite number: {value}", value=value)
        return value
    
    if isinstance(value, int):
        return Decimal(value)
    
    number = float(value)
    if not math.isfinite(number):
        raise ValidationViolationError(f"Cannot format non-finite number: {value}", value=value)
    return Decimal(repr(number))


def parse_decimal(token: str) -> float:
    """Parse a plain or exponential decimal number. NaN and infinity are rejected."""
    if not _DECIMAL_RE.fullmatch(token):
        raise MalformedElementError(f"Invalid decimal number: {token!r}", token=token)
    number = float(token)
    if not math.isfinite(number):
        raise MalformedElementError(f"Decimal number out of range: {token!r}", token=token)
    return number
