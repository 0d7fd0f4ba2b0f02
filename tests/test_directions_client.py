"""
Tests for DirectionsClient against a mocked transport.
"""
import logging

import httpx
import pytest

from directions_codec.core.config import settings
from directions_codec.core.exceptions import DirectionsApiError, ValidationViolationError
from directions_codec.schemas.common import Point
from directions_codec.schemas.route_options import RouteOptions
from directions_codec.services.directions_client import DirectionsClient

COORDINATES = [
    Point(longitude=-122.42, latitude=37.78),
    Point(longitude=-122.27, latitude=37.8),
]


def make_client(handler, **kwargs):
    kwargs.setdefault("access_token", "pk.test")
    return DirectionsClient(
        base_url="https://directions.test",
        transport=httpx.MockTransport(handler),
        **kwargs
    )


def test_get_directions_sends_encoded_options():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 14021.3}]})

    options = RouteOptions(coordinates=COORDINATES, steps=True, bearings=[[45, 90], None])
    data = make_client(handler).get_directions(options)

    assert data["routes"][0]["distance"] == 14021.3
    assert len(requests) == 1
    url = requests[0].url
    assert url.host == "directions.test"
    assert url.path == "/directions/v5/mapbox/driving/-122.42,37.78;-122.27,37.8"
    assert url.params["access_token"] == "pk.test"
    assert url.params["steps"] == "true"
    assert url.params["bearings"] == "45,90;"


def test_invalid_options_never_reach_the_network():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    options = RouteOptions(coordinates=COORDINATES, bearings=[[370, 5], None])
    with pytest.raises(ValidationViolationError):
        make_client(handler).get_directions(options)
    assert requests == []


def test_error_status_raises_api_error():
    def handler(request):
        return httpx.Response(401, json={"message": "Not Authorized - Invalid Token"})

    with pytest.raises(DirectionsApiError) as exc_info:
        make_client(handler).get_directions(RouteOptions(coordinates=COORDINATES))
    assert exc_info.value.status_code == 401


def test_non_ok_code_is_returned(caplog):
    def handler(request):
        return httpx.Response(200, json={"code": "NoRoute", "message": "No route found"})

    with caplog.at_level(logging.WARNING, logger="directions_codec"):
        data = make_client(handler).get_directions(RouteOptions(coordinates=COORDINATES))
    assert data["code"] == "NoRoute"
    assert "NoRoute" in caplog.text


def test_missing_token_logs_warning(monkeypatch, caplog):
    monkeypatch.setattr(settings, "MAPBOX_ACCESS_TOKEN", None)

    with caplog.at_level(logging.WARNING, logger="directions_codec"):
        client = DirectionsClient()
    assert client.access_token is None
    assert "MAPBOX_ACCESS_TOKEN" in caplog.text
    assert "access_token" not in client.build_url(RouteOptions(coordinates=COORDINATES))
