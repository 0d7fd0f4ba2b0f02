"""
Directions request options and their query-parameter encoding.

RouteOptions carries everything a directions request needs. It converts to
and from the query parameters of a Directions v5 URL using the list codec,
so the same wire rules apply in both directions.
"""
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, Field, ValidationError

from directions_codec.core.exceptions import MalformedElementError, ValidationViolationError
from directions_codec.core.logging_config import logger
from directions_codec.models.criteria import (
    BASE_API_URL,
    PROFILE_DEFAULT_USER,
    Annotation,
    Approach,
    Exclude,
    Geometries,
    Include,
    Overview,
    Profile,
    VoiceUnit,
    parse_criteria,
)
from directions_codec.schemas.common import Point
from directions_codec.utils.list_formatter import (
    format_annotations,
    format_approaches,
    format_bearings,
    format_coordinates,
    format_list,
    format_radiuses,
    format_snapping_include_closures,
    format_token,
    format_waypoint_indices,
    format_waypoint_names,
    format_waypoint_targets,
)
from directions_codec.utils.list_parser import (
    parse_boolean,
    parse_booleans,
    parse_decimal_lists,
    parse_integers,
    parse_points,
    parse_strings,
)
from directions_codec.utils.number_format import parse_decimal

ISO_8601_PATTERN = "%Y-%m-%dT%H:%M"
DIRECTIONS_PATH = "directions/v5"

MIN_COORDINATES = 2
MAX_COORDINATES = 25


class RouteOptions(BaseModel):
    """Parameters of a single Directions v5 request."""
    user: str = PROFILE_DEFAULT_USER
    profile: Profile = Profile.DRIVING
    coordinates: List[Point] = Field(..., min_length=MIN_COORDINATES, max_length=MAX_COORDINATES)

    alternatives: Optional[bool] = None
    language: Optional[str] = None
    radiuses: Optional[List[Optional[Union[str, float]]]] = None
    bearings: Optional[List[Optional[List[Optional[float]]]]] = None
    continue_straight: Optional[bool] = None
    roundabout_exits: Optional[bool] = None
    geometries: Optional[Geometries] = None
    overview: Optional[Overview] = None
    steps: Optional[bool] = None
    annotations: Optional[List[Annotation]] = None
    exclude: Optional[List[Exclude]] = None
    include: Optional[List[Include]] = None
    voice_instructions: Optional[bool] = None
    banner_instructions: Optional[bool] = None
    voice_units: Optional[VoiceUnit] = None
    approaches: Optional[List[Optional[Approach]]] = None
    waypoint_indices: Optional[List[int]] = None
    waypoint_names: Optional[List[Optional[str]]] = None
    waypoint_targets: Optional[List[Optional[Point]]] = None
    snapping_include_closures: Optional[List[Optional[bool]]] = None
    max_height: Optional[float] = Field(None, ge=0, description="Vehicle height in meters")
    max_width: Optional[float] = Field(None, ge=0, description="Vehicle width in meters")
    depart_at: Optional[datetime] = None
    arrive_by: Optional[datetime] = None
    enable_refresh: Optional[bool] = None

    def coordinates_string(self) -> str:
        return format_coordinates(self.coordinates)

    def check_waypoints(self) -> None:
        """
        Check that per-coordinate lists line up with the coordinates.

        Raises:
            ValidationViolationError: On the first list whose length or
                content does not match the coordinates
        """
        count = len(self.coordinates)

        per_coordinate = {
            "radiuses": self.radiuses,
            "bearings": self.bearings,
            "approaches": self.approaches,
            "waypoint_targets": self.waypoint_targets,
            "snapping_include_closures": self.snapping_include_closures,
        }
        for name, values in per_coordinate.items():
            if values is not None and len(values) != count:
                raise ValidationViolationError(
                    f"Number of {name} ({len(values)}) must match the number of coordinates ({count})",
                    field=name,
                    value=values
                )

        indices = self.waypoint_indices
        if indices is not None:
            if len(indices) < 2 or indices[0] != 0 or indices[-1] != count - 1:
                raise ValidationViolationError(
                    "Waypoints must start with 0 and end with the last coordinate index",
                    field="waypoints",
                    value=indices
                )
            for position in range(1, len(indices)):
                if indices[position] <= indices[position - 1]:
                    raise ValidationViolationError(
                        "Waypoint indices must be strictly increasing",
                        field="waypoints",
                        value=indices,
                        position=position
                    )

        if self.waypoint_names is not None:
            waypoints = len(indices) if indices is not None else count
            if len(self.waypoint_names) != waypoints:
                raise ValidationViolationError(
                    f"Number of waypoint names ({len(self.waypoint_names)}) must match the number of waypoints ({waypoints})",
                    field="waypoint_names",
                    value=self.waypoint_names
                )

    def to_query_params(self) -> Dict[str, str]:
        """
        Encode the options as query parameters.

        Only supplied options are included. Validation runs before anything
        is returned, so a bad option never reaches the network.

        Raises:
            MalformedElementError: If a list value cannot be rendered
            ValidationViolationError: If a value breaks a parameter rule
        """
        self.check_waypoints()

        params = {
            "alternatives": _format_scalar(self.alternatives),
            "language": self.language,
            "radiuses": format_radiuses(self.radiuses),
            "bearings": format_bearings(self.bearings),
            "continue_straight": _format_scalar(self.continue_straight),
            "roundabout_exits": _format_scalar(self.roundabout_exits),
            "geometries": _format_scalar(self.geometries),
            "overview": _format_scalar(self.overview),
            "steps": _format_scalar(self.steps),
            "annotations": format_annotations(self.annotations),
            "exclude": format_list(self.exclude, delimiter=","),
            "include": format_list(self.include, delimiter=","),
            "voice_instructions": _format_scalar(self.voice_instructions),
            "banner_instructions": _format_scalar(self.banner_instructions),
            "voice_units": _format_scalar(self.voice_units),
            "approaches": format_approaches(self.approaches),
            "waypoints": format_waypoint_indices(self.waypoint_indices),
            "waypoint_names": format_waypoint_names(self.waypoint_names),
            "waypoint_targets": format_waypoint_targets(self.waypoint_targets),
            "snapping_include_closures": format_snapping_include_closures(self.snapping_include_closures),
            "max_height": _format_scalar(self.max_height),
            "max_width": _format_scalar(self.max_width),
            "depart_at": _format_datetime(self.depart_at),
            "arrive_by": _format_datetime(self.arrive_by),
            "enable_refresh": _format_scalar(self.enable_refresh),
        }
        return {name: value for name, value in params.items() if value is not None}

    def to_url(self, base_url: str = BASE_API_URL, access_token: Optional[str] = None) -> str:
        """Build the full request URL; httpx takes care of percent-encoding."""
        params = self.to_query_params()
        if access_token:
            params["access_token"] = access_token
        path = f"{base_url.rstrip('/')}/{DIRECTIONS_PATH}/{self.user}/{self.profile.value}/{self.coordinates_string()}"
        return str(httpx.URL(path, params=params))

    @classmethod
    def from_query_params(
        cls,
        coordinates: str,
        params: Mapping[str, str],
        profile: Union[Profile, str] = Profile.DRIVING,
        user: str = PROFILE_DEFAULT_USER
    ) -> "RouteOptions":
        """
        Rebuild options from a coordinates path segment and query parameters.

        Args:
            coordinates: 'lon,lat;lon,lat;...' path segment
            params: Query parameters; unknown names are ignored
            profile: Routing profile
            user: Profile owner

        Raises:
            MalformedElementError: If a value does not parse
            ValidationViolationError: If a value is outside its catalog or
                breaks a field constraint
        """
        points = _without_gaps("coordinates", parse_points(coordinates)) or []

        def scalar(name: str, parser: Callable[[str], Any]) -> Any:
            raw = params.get(name)
            if raw is None or raw == "":
                return None
            try:
                return parser(raw)
            except ValueError as e:
                logger.debug(f"Rejected {name} {raw!r}: {e}")
                raise MalformedElementError(f"Invalid {name}: {e}", token=raw) from e

        def criteria(enum_cls, name: str) -> Callable[[str], Any]:
            return lambda token: parse_criteria(enum_cls, token, field=name)

        fields = dict(
            user=user,
            profile=parse_criteria(Profile, profile, field="profile"),
            coordinates=points,
            alternatives=scalar("alternatives", parse_boolean),
            language=params.get("language") or None,
            radiuses=parse_strings(params.get("radiuses")),
            bearings=parse_decimal_lists(params.get("bearings")),
            continue_straight=scalar("continue_straight", parse_boolean),
            roundabout_exits=scalar("roundabout_exits", parse_boolean),
            geometries=_parse_optional_criteria(Geometries, "geometries", params),
            overview=_parse_optional_criteria(Overview, "overview", params),
            steps=scalar("steps", parse_boolean),
            annotations=_without_gaps("annotations", parse_strings(params.get("annotations"), ",", criteria(Annotation, "annotations"))),
            exclude=_without_gaps("exclude", parse_strings(params.get("exclude"), ",", criteria(Exclude, "exclude"))),
            include=_without_gaps("include", parse_strings(params.get("include"), ",", criteria(Include, "include"))),
            voice_instructions=scalar("voice_instructions", parse_boolean),
            banner_instructions=scalar("banner_instructions", parse_boolean),
            voice_units=_parse_optional_criteria(VoiceUnit, "voice_units", params),
            approaches=parse_strings(params.get("approaches"), value_map=criteria(Approach, "approaches")),
            waypoint_indices=_without_gaps("waypoints", parse_integers(params.get("waypoints"))),
            waypoint_names=parse_strings(params.get("waypoint_names")),
            waypoint_targets=parse_points(params.get("waypoint_targets")),
            snapping_include_closures=parse_booleans(params.get("snapping_include_closures")),
            max_height=scalar("max_height", parse_decimal),
            max_width=scalar("max_width", parse_decimal),
            depart_at=scalar("depart_at", lambda raw: datetime.strptime(raw, ISO_8601_PATTERN)),
            arrive_by=scalar("arrive_by", lambda raw: datetime.strptime(raw, ISO_8601_PATTERN)),
            enable_refresh=scalar("enable_refresh", parse_boolean),
        )
        try:
            return cls(**fields)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            logger.debug(f"Rejected {field}: {error['msg']}")
            raise ValidationViolationError(
                f"Invalid {field}: {error['msg']}",
                field=field,
                value=error.get("input")
            ) from e

    @classmethod
    def from_url(cls, url: str) -> "RouteOptions":
        """Rebuild options from a full Directions v5 request URL."""
        parsed = httpx.URL(url)
        segments = [segment for segment in parsed.path.split("/") if segment]
        try:
            start = segments.index("directions")
        except ValueError:
            raise ValueError(f"Not a directions request URL: {url}") from None
        if segments[start + 1:start + 2] != ["v5"] or len(segments) != start + 5:
            raise ValueError(f"Not a directions request URL: {url}")

        user, profile, coordinates = segments[start + 2:start + 5]
        return cls.from_query_params(
            coordinates,
            dict(parsed.params),
            profile=profile,
            user=user
        )


def _format_scalar(value: Any) -> Optional[str]:
    if value is None:
        return None
    return format_token(value)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(ISO_8601_PATTERN)


def _parse_optional_criteria(enum_cls, name: str, params: Mapping[str, str]) -> Any:
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    return parse_criteria(enum_cls, raw, field=name)


def _without_gaps(name: str, values: Optional[List[Any]]) -> Optional[List[Any]]:
    """Reject empty slots in a parameter that has no absent positions."""
    if values is None:
        return None
    for position, value in enumerate(values):
        if value is None:
            logger.debug(f"Rejected empty slot in {name} at position {position}")
            raise MalformedElementError(f"{name} cannot contain empty values", token="", position=position)
    return values
