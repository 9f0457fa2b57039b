from __future__ import annotations

import asyncio

import httpx
import pytest

from trip_planner.exceptions import RouteServiceError
from trip_planner.services.osrm import OsrmClient, format_distance_km, format_duration
from trip_planner.services.types import GeoPoint

START = GeoPoint(latitude=31.9038, longitude=35.2034)
END = GeoPoint(latitude=32.2211, longitude=35.2544)

OK_PAYLOAD = {
    "code": "Ok",
    "routes": [
        {
            "distance": 45000.0,
            "duration": 3000.0,
            "geometry": {"type": "LineString", "coordinates": [[35.2034, 31.9038], [35.2544, 32.2211]]},
            "legs": [
                {
                    "steps": [
                        {"distance": 1200.0, "maneuver": {"instruction": "Head north"}},
                        {
                            "distance": 43800.0,
                            "name": "Route 60",
                            "maneuver": {"type": "turn", "modifier": "right"},
                        },
                    ]
                }
            ],
        }
    ],
}


def _route(handler, points=(START, END)):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = OsrmClient(base_url="https://osrm.test/", timeout=5, http_client=http_client)
            return await client.compute_route(list(points))

    return asyncio.run(run())


def test_compute_route_parses_distance_duration_and_steps() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_PAYLOAD)

    result = _route(handler)

    assert result.distance_meters == 45000.0
    assert result.duration_seconds == 3000.0
    assert result.geometry["type"] == "LineString"
    assert [(step.instruction, step.distance_meters) for step in result.legs[0].steps] == [
        ("Head north", 1200.0),
        ("Turn right onto Route 60", 43800.0),
    ]

    request = seen[0]
    assert request.url.path == "/route/v1/driving/35.203400,31.903800;35.254400,32.221100"
    assert request.url.params["steps"] == "true"
    assert request.url.params["overview"] == "full"
    assert request.url.params["geometries"] == "geojson"


def test_error_status_surfaces_service_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "InvalidQuery", "message": "Query string malformed"})

    with pytest.raises(RouteServiceError, match="Query string malformed"):
        _route(handler)


def test_error_status_without_json_uses_status_line() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="down")

    with pytest.raises(RouteServiceError, match="503"):
        _route(handler)


def test_no_route_reported_by_service() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "NoRoute", "message": "Impossible route between points", "routes": []})

    with pytest.raises(RouteServiceError, match="Impossible route between points"):
        _route(handler)


def test_empty_routes_without_message_uses_default() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Ok", "routes": []})

    with pytest.raises(RouteServiceError, match="No route found"):
        _route(handler)


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RouteServiceError, match="connection refused"):
        _route(handler)


def test_requires_two_points() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(RouteServiceError):
        _route(handler, points=(START,))


@pytest.mark.parametrize(
    ("meters", "expected"),
    [(45000, "45.0 km"), (0, "0.0 km"), (12345, "12.3 km"), (999, "1.0 km")],
)
def test_format_distance_km(meters, expected) -> None:
    assert format_distance_km(meters) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(3000, "0h 50m"), (3600, "1h 0m"), (8130, "2h 16m"), (0, "0h 0m")],
)
def test_format_duration(seconds, expected) -> None:
    assert format_duration(seconds) == expected


def test_null_step_distance_counts_as_zero() -> None:
    payload = {
        "code": "Ok",
        "routes": [
            {
                "distance": 500.0,
                "duration": None,
                "geometry": None,
                "legs": [{"steps": [{"distance": None, "maneuver": {"type": "arrive"}}]}],
            }
        ],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    result = _route(handler)

    assert result.duration_seconds == 0.0
    assert [(step.instruction, step.distance_meters) for step in result.legs[0].steps] == [("Arrive", 0.0)]


def test_non_numeric_distance_raises_route_service_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "Ok", "routes": [{"distance": "far", "legs": []}]})

    with pytest.raises(RouteServiceError, match="invalid distance"):
        _route(handler)
