"""
Formatters turning positional value lists into query-parameter strings.

None at a position renders as an empty slot between delimiters. The field
wrappers validate every present value first and fail the whole call on the
first violation, so a half-valid list never reaches the wire.
"""
import enum
from decimal import Decimal
from typing import Any, Callable, List, Optional, Sequence, Union

from directions_codec.core.exceptions import CodecError, MalformedElementError, ValidationViolationError
from directions_codec.core.logging_config import logger
from directions_codec.models.criteria import Approach, parse_criteria
from directions_codec.schemas.common import Point
from directions_codec.utils.number_format import format_decimal, parse_decimal

DEFAULT_DELIMITER = ";"
ANNOTATIONS_DELIMITER = ","

RADIUS_UNLIMITED = "unlimited"
MIN_BEARING_DEGREES = 0
MAX_BEARING_DEGREES = 360

Bearing = Sequence[Optional[float]]
Radius = Union[str, int, float, Decimal]


def format_point(point: Point) -> str:
    """Render a point as 'longitude,latitude'."""
    return f"{format_decimal(point.longitude)},{format_decimal(point.latitude)}"


def format_token(value: Any) -> str:
    """
    Generic element-to-token conversion.

    Booleans become 'true'/'false', enums their wire value, numbers their
    canonical form and points 'lon,lat'. Text passes through unchanged.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return format_token(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        return format_decimal(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Point):
        return format_point(value)
    raise TypeError(f"Cannot format {type(value).__name__} as a list token")


def format_list(
    values: Optional[Sequence[Any]],
    delimiter: str = DEFAULT_DELIMITER,
    to_token: Callable[[Any], str] = format_token,
    trim_trailing_absences: bool = False
) -> Optional[str]:
    """
    Join a positional sequence into one delimited string.

    Args:
        values: Values to join, None entries are absent positions
        delimiter: Separator between positions
        to_token: Converts one present value into its text
        trim_trailing_absences: Drop absent positions after the last present one

    Returns:
        None if values is None, otherwise the joined string ("" when
        trimming leaves nothing)

    Raises:
        MalformedElementError: If a rendered token contains the delimiter
    """
    if values is None:
        return None

    values = list(values)
    end = len(values)
    if trim_trailing_absences:
        while end > 0 and values[end - 1] is None:
            end -= 1

    tokens: List[str] = []
    for position in range(end):
        value = values[position]
        if value is None:
            tokens.append("")
            continue
        try:
            token = to_token(value)
        except CodecError as e:
            logger.debug(f"Rejected value {value!r} at position {position}: {e.detail}")
            raise e.at(position) from e
        if delimiter in token:
            logger.debug(f"Rejected token {token!r} at position {position}: contains {delimiter!r}")
            raise MalformedElementError(
                f"Token {token!r} contains the delimiter {delimiter!r}",
                token=token,
                position=position
            )
        tokens.append(token)
    return delimiter.join(tokens)


def format_bearings(bearings: Optional[Sequence[Optional[Bearing]]]) -> Optional[str]:
    """
    Format (angle, tolerance) pairs as 'angle,tolerance;...'.

    A pair with a missing component is sent as an empty slot. Both values
    must lie within 0..360 degrees.

    Raises:
        MalformedElementError: If a pair does not have exactly 2 values
        ValidationViolationError: If an angle or tolerance is out of range
    """
    if bearings is None:
        return None

    tokens: List[Optional[str]] = []
    for position, bearing in enumerate(bearings):
        if bearing is None:
            tokens.append(None)
            continue
        if len(bearing) != 2:
            logger.debug(f"Rejected bearing {bearing!r} at position {position}")
            raise MalformedElementError(
                f"Bearing size should be 2, got {len(bearing)}",
                token=bearing,
                position=position
            )
        angle, tolerance = bearing
        if angle is None or tolerance is None:
            tokens.append(None)
            continue
        for name, degrees in (("angle", angle), ("tolerance", tolerance)):
            if not MIN_BEARING_DEGREES <= degrees <= MAX_BEARING_DEGREES:
                logger.debug(f"Rejected bearing {name} {degrees!r} at position {position}")
                raise ValidationViolationError(
                    f"Bearing {name} has to be from {MIN_BEARING_DEGREES} to {MAX_BEARING_DEGREES}, got {degrees}",
                    field="bearings",
                    value=bearing,
                    position=position
                )
        tokens.append(f"{format_decimal(angle)},{format_decimal(tolerance)}")
    return format_list(tokens, to_token=str)


def format_distributions(distributions: Optional[Sequence[Optional[Sequence[float]]]]) -> Optional[str]:
    """
    Format per-leg distribution pairs as 'a,b;...'.

    An empty input list means the parameter is not sent. Values past the
    second one in a pair are ignored.
    """
    if not distributions:
        return None

    tokens: List[Optional[str]] = []
    for position, pair in enumerate(distributions):
        if pair is None or len(pair) == 0:
            tokens.append(None)
            continue
        if len(pair) < 2:
            logger.debug(f"Rejected distribution {pair!r} at position {position}")
            raise MalformedElementError(
                f"Distribution needs 2 values, got {len(pair)}",
                token=pair,
                position=position
            )
        try:
            tokens.append(f"{format_decimal(pair[0])},{format_decimal(pair[1])}")
        except CodecError as e:
            logger.debug(f"Rejected distribution {pair!r} at position {position}: {e.detail}")
            raise e.at(position) from e
    return format_list(tokens, to_token=str)


def format_approaches(approaches: Optional[Sequence[Optional[Union[Approach, str]]]]) -> Optional[str]:
    """
    Format approaches, each 'unrestricted' or 'curb'.

    Raises:
        ValidationViolationError: If a value is not an Approach
    """
    if approaches is None:
        return None

    validated: List[Optional[Approach]] = []
    for position, approach in enumerate(approaches):
        if approach is None:
            validated.append(None)
            continue
        try:
            validated.append(parse_criteria(Approach, approach, field="approaches"))
        except ValidationViolationError as e:
            logger.debug(f"Rejected approach {approach!r} at position {position}")
            raise e.at(position) from e
    return format_list(validated)


def format_radiuses(radiuses: Optional[Sequence[Optional[Radius]]]) -> Optional[str]:
    """
    Format snapping radiuses in meters.

    Each radius is 'unlimited' or a non-negative number. Text is sent as
    given; numbers are rendered canonically.

    Raises:
        MalformedElementError: If a text radius is not a number
        ValidationViolationError: If a radius is negative
    """
    if radiuses is None:
        return None

    tokens: List[Optional[str]] = []
    for position, radius in enumerate(radiuses):
        if radius is None:
            tokens.append(None)
            continue
        if isinstance(radius, str):
            if radius == RADIUS_UNLIMITED:
                tokens.append(radius)
                continue
            try:
                meters = parse_decimal(radius)
            except MalformedElementError as e:
                logger.debug(f"Rejected radius {radius!r} at position {position}: {e.detail}")
                raise e.at(position) from e
            token = radius
        else:
            meters = radius
            try:
                token = format_decimal(radius)
            except CodecError as e:
                logger.debug(f"Rejected radius {radius!r} at position {position}: {e.detail}")
                raise e.at(position) from e
        if meters < 0:
            logger.debug(f"Rejected radius {radius!r} at position {position}")
            raise ValidationViolationError(
                f'Radiuses need to be greater than 0 or a string "{RADIUS_UNLIMITED}", got {radius}',
                field="radiuses",
                value=radius,
                position=position
            )
        tokens.append(token)
    return format_list(tokens, to_token=str)


def format_waypoint_names(waypoint_names: Optional[Sequence[Optional[str]]]) -> Optional[str]:
    """Format waypoint names. An empty list means the parameter is not sent."""
    if not waypoint_names:
        return None
    return format_list(waypoint_names)


def format_annotations(annotations: Optional[Sequence[Any]]) -> Optional[str]:
    return format_list(annotations, delimiter=ANNOTATIONS_DELIMITER)


def format_waypoint_indices(indices: Optional[Sequence[Optional[int]]]) -> Optional[str]:
    return format_list(indices)


def format_snapping_include_closures(flags: Optional[Sequence[Optional[bool]]]) -> Optional[str]:
    return format_list(flags)


def format_coordinates(coordinates: Optional[Sequence[Point]]) -> Optional[str]:
    """
    Format the request coordinates as 'lon,lat;lon,lat;...'.

    Coordinates have no empty slots; every point must be present.
    """
    if coordinates is None:
        return None

    for position, point in enumerate(coordinates):
        if point is None:
            logger.debug(f"Rejected absent coordinate at position {position}")
            raise MalformedElementError("Coordinates cannot contain absent points", position=position)
    return format_list(coordinates, to_token=format_point)


def format_waypoint_targets(points: Optional[Sequence[Optional[Point]]]) -> Optional[str]:
    """Format waypoint targets; a missing target is sent as an empty slot."""
    return format_list(points, to_token=format_point)
