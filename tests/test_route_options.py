"""
Tests for RouteOptions query-parameter encoding and decoding.
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from directions_codec.core.exceptions import MalformedElementError, ValidationViolationError
from directions_codec.models.criteria import Annotation, Approach, Exclude, Overview, Profile
from directions_codec.schemas.common import Point
from directions_codec.schemas.route_options import RouteOptions

SAN_FRANCISCO = Point(longitude=-122.42, latitude=37.78)
OAKLAND = Point(longitude=-122.27, latitude=37.8)
BERKELEY = Point(longitude=-122.27, latitude=37.87)


def make_options(**kwargs):
    kwargs.setdefault("coordinates", [SAN_FRANCISCO, OAKLAND])
    return RouteOptions(**kwargs)


class TestToQueryParams:

    def test_only_supplied_params(self):
        assert make_options().to_query_params() == {}

    def test_coordinates_string(self):
        assert make_options().coordinates_string() == "-122.42,37.78;-122.27,37.8"

    def test_full_encoding(self):
        options = make_options(
            profile=Profile.DRIVING_TRAFFIC,
            steps=True,
            alternatives=False,
            overview=Overview.FULL,
            annotations=[Annotation.DISTANCE, Annotation.CONGESTION],
            exclude=[Exclude.TOLL, Exclude.FERRY],
            approaches=[None, "curb"],
            bearings=[[45, 90], None],
            radiuses=["unlimited", 100],
            waypoint_indices=[0, 1],
            waypoint_names=["Home", "Work"],
            waypoint_targets=[None, Point(longitude=-122.2701, latitude=37.8)],
            snapping_include_closures=[True, None],
            max_height=4.5,
            depart_at=datetime(2026, 10, 16, 8, 30),
        )
        assert options.to_query_params() == {
            "steps": "true",
            "alternatives": "false",
            "overview": "full",
            "annotations": "distance,congestion",
            "exclude": "toll,ferry",
            "approaches": ";curb",
            "bearings": "45,90;",
            "radiuses": "unlimited;100",
            "waypoints": "0;1",
            "waypoint_names": "Home;Work",
            "waypoint_targets": ";-122.2701,37.8",
            "snapping_include_closures": "true;",
            "max_height": "4.5",
            "depart_at": "2026-10-16T08:30",
        }

    def test_bearing_out_of_range(self):
        options = make_options(bearings=[[400, 10], None])
        with pytest.raises(ValidationViolationError):
            options.to_query_params()

    def test_negative_radius(self):
        options = make_options(radiuses=["10", "-5"])
        with pytest.raises(ValidationViolationError):
            options.to_query_params()


class TestCheckWaypoints:

    def test_per_coordinate_length(self):
        options = make_options(approaches=[Approach.CURB])
        with pytest.raises(ValidationViolationError) as exc_info:
            options.check_waypoints()
        assert exc_info.value.field == "approaches"

    def test_waypoints_must_cover_route(self):
        options = make_options(coordinates=[SAN_FRANCISCO, OAKLAND, BERKELEY], waypoint_indices=[0, 1])
        with pytest.raises(ValidationViolationError):
            options.check_waypoints()

    def test_waypoints_strictly_increasing(self):
        options = make_options(coordinates=[SAN_FRANCISCO, OAKLAND, BERKELEY], waypoint_indices=[0, 0, 2])
        with pytest.raises(ValidationViolationError) as exc_info:
            options.check_waypoints()
        assert exc_info.value.position == 1

    def test_waypoint_names_follow_waypoints(self):
        options = make_options(
            coordinates=[SAN_FRANCISCO, OAKLAND, BERKELEY],
            waypoint_indices=[0, 2],
            waypoint_names=["Start", "End"],
        )
        options.check_waypoints()

        options = make_options(
            coordinates=[SAN_FRANCISCO, OAKLAND, BERKELEY],
            waypoint_indices=[0, 2],
            waypoint_names=["Start", "Middle", "End"],
        )
        with pytest.raises(ValidationViolationError):
            options.check_waypoints()


class TestModelValidation:

    def test_needs_two_coordinates(self):
        with pytest.raises(ValidationError):
            RouteOptions(coordinates=[SAN_FRANCISCO])

    def test_unknown_approach(self):
        with pytest.raises(ValidationError):
            make_options(approaches=["sideways", None])


class TestFromQueryParams:

    def test_decodes_lists(self):
        options = RouteOptions.from_query_params(
            "-122.42,37.78;-122.27,37.8",
            {
                "approaches": ";curb",
                "bearings": "45,90;",
                "radiuses": "unlimited;",
                "annotations": "distance,speed",
                "steps": "true",
                "arrive_by": "2026-10-16T18:00",
            },
            profile="walking",
        )
        assert options.profile is Profile.WALKING
        assert options.coordinates == [SAN_FRANCISCO, OAKLAND]
        assert options.approaches == [None, Approach.CURB]
        assert options.bearings == [[45.0, 90.0], None]
        assert options.radiuses == ["unlimited", None]
        assert options.annotations == [Annotation.DISTANCE, Annotation.SPEED]
        assert options.steps is True
        assert options.arrive_by == datetime(2026, 10, 16, 18, 0)

    def test_unknown_overview(self):
        with pytest.raises(ValidationViolationError):
            RouteOptions.from_query_params("1,2;3,4", {"overview": "partial"})

    def test_unknown_annotation_reports_position(self):
        with pytest.raises(ValidationViolationError) as exc_info:
            RouteOptions.from_query_params("1,2;3,4", {"annotations": "distance,bogus"})
        assert exc_info.value.position == 1

    def test_bad_boolean(self):
        with pytest.raises(MalformedElementError):
            RouteOptions.from_query_params("1,2;3,4", {"steps": "yes"})

    def test_absent_coordinate(self):
        with pytest.raises(MalformedElementError):
            RouteOptions.from_query_params("1,2;;3,4", {})

    def test_empty_waypoint_index(self):
        with pytest.raises(MalformedElementError) as exc_info:
            RouteOptions.from_query_params("1,2;3,4;5,6", {"waypoints": "0;;2"})
        assert exc_info.value.position == 1

    @pytest.mark.parametrize("name,value", [
        ("annotations", "distance,,speed"),
        ("exclude", "toll,,ferry"),
        ("include", "hov2,"),
    ])
    def test_empty_catalog_entry(self, name, value):
        with pytest.raises(MalformedElementError) as exc_info:
            RouteOptions.from_query_params("1,2;3,4", {name: value})
        assert exc_info.value.position == 1

    def test_too_few_coordinates(self):
        with pytest.raises(ValidationViolationError) as exc_info:
            RouteOptions.from_query_params("1,2", {})
        assert exc_info.value.field == "coordinates"

    def test_negative_max_height(self):
        with pytest.raises(ValidationViolationError) as exc_info:
            RouteOptions.from_query_params("1,2;3,4", {"max_height": "-1.5"})
        assert exc_info.value.field == "max_height"


class TestUrlRoundTrip:

    def test_round_trip(self):
        options = make_options(
            profile=Profile.DRIVING_TRAFFIC,
            coordinates=[SAN_FRANCISCO, OAKLAND, BERKELEY],
            approaches=[None, Approach.UNRESTRICTED, Approach.CURB],
            bearings=[[45.0, 90.0], None, [0.0, 180.0]],
            radiuses=["unlimited", "100", None],
            waypoint_indices=[0, 2],
            waypoint_names=["Home", "Work"],
            exclude=[Exclude.MOTORWAY],
            max_width=2.2,
            depart_at=datetime(2026, 10, 16, 8, 30),
        )
        url = options.to_url(access_token="pk.test")
        assert url.startswith("https://api.mapbox.com/directions/v5/mapbox/driving-traffic/")
        assert RouteOptions.from_url(url) == options

    def test_not_a_directions_url(self):
        with pytest.raises(ValueError):
            RouteOptions.from_url("https://api.mapbox.com/geocoding/v5/mapbox.places/x.json")
