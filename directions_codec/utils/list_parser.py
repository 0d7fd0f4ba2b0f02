"""
Parsers for delimiter-separated query-parameter values.

An empty slot between delimiters is an absent value and comes back as None
at that position. A missing parameter (None) stays None, while an empty
string parses to an empty list.
"""
import re
from typing import Callable, List, Optional, TypeVar

from directions_codec.core.exceptions import CodecError, MalformedElementError
from directions_codec.core.logging_config import logger
from directions_codec.schemas.common import Point
from directions_codec.utils.number_format import parse_decimal

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_DELIMITER = ";"
INNER_DELIMITER = ","

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_list(
    value: Optional[str],
    element_parser: Callable[[str], T],
    delimiter: str = DEFAULT_DELIMITER
) -> Optional[List[Optional[T]]]:
    """
    Split a delimited string and convert every non-empty token.
    
    Args:
        value: Raw parameter value, or None if the parameter was not supplied
        element_parser: Converts one non-empty token into a value
        delimiter: Single-character separator between positions
        
    Returns:
        None for None, [] for "", otherwise one entry per position with
        None where the token was empty
        
    Raises:
        MalformedElementError: If any token fails to parse
        ValidationViolationError: If element_parser rejects a well-formed token
    """
    if value is None:
        return None
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
    if value == "":
        return []
    
    result: List[Optional[T]] = []
    for position, token in enumerate(value.split(delimiter)):
        if token == "":
            result.append(None)
            continue
        try:
            result.append(element_parser(token))
        except CodecError as e:
            logger.debug(f"Rejected token {token!r} at position {position}: {e.detail}")
            raise e.at(position) from e
        except (TypeError, ValueError) as e:
            logger.debug(f"Rejected token {token!r} at position {position}: {e}")
            raise MalformedElementError(
                f"Cannot parse {token!r}: {e}", token=token, position=position
            ) from e
    return result


# Element parsers

def parse_integer(token: str) -> int:
    """Parse a base-10 integer with an optional sign."""
    if not _INTEGER_RE.fullmatch(token):
        raise MalformedElementError(f"Invalid integer: {token!r}", token=token)
    return int(token)


def parse_boolean(token: str) -> bool:
    """Parse exactly 'true' or 'false'."""
    if token == "true":
        return True
    if token == "false":
        return False
    raise MalformedElementError(f"Invalid boolean: {token!r}", token=token)


def parse_point(token: str, inner_delimiter: str = INNER_DELIMITER) -> Point:
    """Parse 'longitude,latitude' into a Point."""
    parts = token.split(inner_delimiter)
    if len(parts) != 2:
        raise MalformedElementError(
            f"Point needs exactly 2 values, got {len(parts)}: {token!r}", token=token
        )
    return Point(longitude=parse_decimal(parts[0]), latitude=parse_decimal(parts[1]))


def parse_decimal_list(token: str, inner_delimiter: str = INNER_DELIMITER) -> List[float]:
    """Parse 'a,b,...' into a list of decimal numbers."""
    return [parse_decimal(part) for part in token.split(inner_delimiter)]


# Specializations

def parse_integers(value: Optional[str], delimiter: str = DEFAULT_DELIMITER) -> Optional[List[Optional[int]]]:
    return parse_list(value, parse_integer, delimiter)


def parse_decimals(value: Optional[str], delimiter: str = DEFAULT_DELIMITER) -> Optional[List[Optional[float]]]:
    return parse_list(value, parse_decimal, delimiter)


def parse_strings(
    value: Optional[str],
    delimiter: str = DEFAULT_DELIMITER,
    value_map: Optional[Callable[[str], U]] = None
) -> Optional[List[Optional[U]]]:
    """
    Split into raw text tokens.
    
    Args:
        value: Raw parameter value
        delimiter: Separator between positions
        value_map: Optional mapping applied to every present token, e.g. a
            criteria validator turning 'curb' into Approach.CURB
    """
    if value_map is None:
        return parse_list(value, str, delimiter)
    return parse_list(value, value_map, delimiter)


def parse_points(value: Optional[str], delimiter: str = DEFAULT_DELIMITER) -> Optional[List[Optional[Point]]]:
    if delimiter == INNER_DELIMITER:
        raise ValueError("Points use ',' internally; pick a different outer delimiter")
    return parse_list(value, parse_point, delimiter)


def parse_booleans(value: Optional[str], delimiter: str = DEFAULT_DELIMITER) -> Optional[List[Optional[bool]]]:
    return parse_list(value, parse_boolean, delimiter)


def parse_decimal_lists(
    value: Optional[str],
    delimiter: str = DEFAULT_DELIMITER
) -> Optional[List[Optional[List[float]]]]:
    """Parse per-position number groups such as bearings: ';5.1,7.4;;'."""
    if delimiter == INNER_DELIMITER:
        raise ValueError("Number groups use ',' internally; pick a different outer delimiter")
    return parse_list(value, parse_decimal_list, delimiter)
