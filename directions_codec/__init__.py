"""
Codec for list-valued query parameters of the Mapbox Directions API.

This package provides:
- Canonical, locale-independent number formatting
- Parsing of delimited parameter values into position-preserving lists
- Formatting of positional lists with per-parameter validation
- Route options and a thin HTTP client built on top of the codec
"""

from directions_codec.core.exceptions import (
    CodecError,
    DirectionsApiError,
    MalformedElementError,
    ValidationViolationError,
)
from directions_codec.schemas.common import Point
from directions_codec.utils.number_format import format_decimal
from directions_codec.utils.list_parser import (
    parse_list,
    parse_integers,
    parse_decimals,
    parse_strings,
    parse_points,
    parse_booleans,
    parse_decimal_lists,
)
from directions_codec.utils.list_formatter import (
    format_list,
    format_bearings,
    format_distributions,
    format_approaches,
    format_radiuses,
    format_waypoint_names,
    format_annotations,
    format_waypoint_indices,
    format_snapping_include_closures,
    format_coordinates,
    format_waypoint_targets,
)

__all__ = [
    "CodecError",
    "DirectionsApiError",
    "MalformedElementError",
    "ValidationViolationError",
    "Point",
    "format_decimal",
    "parse_list",
    "parse_integers",
    "parse_decimals",
    "parse_strings",
    "parse_points",
    "parse_booleans",
    "parse_decimal_lists",
    "format_list",
    "format_bearings",
    "format_distributions",
    "format_approaches",
    "format_radiuses",
    "format_waypoint_names",
    "format_annotations",
    "format_waypoint_indices",
    "format_snapping_include_closures",
    "format_coordinates",
    "format_waypoint_targets",
]
