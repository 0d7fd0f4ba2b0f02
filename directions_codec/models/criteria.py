"""
Closed catalogs of the string values the directions API accepts.

Each category is its own enum, so a value from one category can never be
passed where another is expected. parse_criteria is the single validator
used by the codec and by RouteOptions.
"""
import enum
from typing import Any, Optional, Type, TypeVar

from directions_codec.core.exceptions import ValidationViolationError
from directions_codec.core.logging_config import logger

BASE_API_URL = "https://api.mapbox.com"
PROFILE_DEFAULT_USER = "mapbox"

E = TypeVar("E", bound=enum.Enum)


class Profile(str, enum.Enum):
    """Routing profile."""
    DRIVING_TRAFFIC = "driving-traffic"
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"


class Geometries(str, enum.Enum):
    """Route geometry encoding."""
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"


class Overview(str, enum.Enum):
    """Detail level of the overview geometry."""
    SIMPLIFIED = "simplified"
    FULL = "full"
    FALSE = "false"


class Annotation(str, enum.Enum):
    """Per-segment metadata along the route."""
    DURATION = "duration"
    DISTANCE = "distance"
    SPEED = "speed"
    CONGESTION = "congestion"
    CONGESTION_NUMERIC = "congestion_numeric"
    MAXSPEED = "maxspeed"
    CLOSURE = "closure"
    TRAFFIC_TENDENCY = "traffic_tendency"


class Exclude(str, enum.Enum):
    """Road types to avoid."""
    TOLL = "toll"
    MOTORWAY = "motorway"
    FERRY = "ferry"
    TUNNEL = "tunnel"
    RESTRICTED = "restricted"
    CASH_ONLY_TOLLS = "cash_only_tolls"
    UNPAVED = "unpaved"


class Include(str, enum.Enum):
    """Lane types the route may use."""
    HOV2 = "hov2"
    HOV3 = "hov3"
    HOT = "hot"


class VoiceUnit(str, enum.Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"


class Source(str, enum.Enum):
    FIRST = "first"
    ANY = "any"


class Destination(str, enum.Enum):
    ANY = "any"
    LAST = "last"


class Approach(str, enum.Enum):
    """Side of the road from which a waypoint may be approached."""
    UNRESTRICTED = "unrestricted"
    CURB = "curb"


class TrafficTendency(enum.IntEnum):
    UNKNOWN = 0
    CONSTANT_CONGESTION = 1
    INCREASING_CONGESTION = 2
    DECREASING_CONGESTION = 3
    RAPIDLY_INCREASING_CONGESTION = 4
    RAPIDLY_DECREASING_CONGESTION = 5


class PaymentMethod(str, enum.Enum):
    """Toll collection payment methods."""
    GENERAL = "general"
    ETC = "etc"
    ETCX = "etcx"
    CASH = "cash"
    EXACT_CASH = "exact_cash"
    COINS = "coins"
    NOTES = "notes"
    DEBIT_CARDS = "debit_cards"
    PASS_CARD = "pass_card"
    CREDIT_CARDS = "credit_cards"
    VIDEO = "video"
    CRYPTOCURRENCIES = "cryptocurrencies"
    APP = "app"


class AmenityType(str, enum.Enum):
    """Amenities at rest stops and service areas."""
    GAS_STATION = "gas_station"
    ELECTRIC_CHARGING_STATION = "electric_charging_station"
    TOILET = "toilet"
    COFFEE = "coffee"
    RESTAURANT = "restaurant"
    SNACK = "snack"
    ATM = "ATM"
    INFO = "info"
    BABY_CARE = "baby_care"
    FACILITIES_FOR_DISABLED = "facilities_for_disabled"
    SHOP = "shop"
    TELEPHONE = "telephone"
    HOTEL = "hotel"
    HOTSPRING = "hotspring"
    SHOWER = "shower"
    PICNIC_SHELTER = "picnic_shelter"
    POST = "post"
    FAX = "FAX"


def parse_criteria(criteria: Type[E], value: Any, field: Optional[str] = None) -> E:
    """
    Map a raw value onto a member of a criteria enum.
    
    Args:
        criteria: Enum class of the category, e.g. Approach
        value: Member or raw wire value ('curb', 3, ...)
        field: Parameter name used in the error message
        
    Returns:
        The matching enum member
        
    Raises:
        ValidationViolationError: If value is not part of the category
    """
    if isinstance(value, criteria):
        return value
    try:
        return criteria(value)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in criteria)
        name = field or criteria.__name__
        logger.debug(f"Rejected {name} value {value!r}")
        raise ValidationViolationError(
            f"Invalid {name} value {value!r}, expected one of: {allowed}",
            field=field,
            value=value
        ) from None


def is_valid_criteria(criteria: Type[enum.Enum], value: Any) -> bool:
    """Check whether value belongs to the given category."""
    try:
        parse_criteria(criteria, value)
    except ValidationViolationError:
        return False
    return True
