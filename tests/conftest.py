from __future__ import annotations

import json
from typing import Any

import pytest
from django.test import Client
from pydantic import BaseModel

from trip_planner.exceptions import GeocodeError, RouteServiceError
from trip_planner.services.types import (
    FavoriteTripData,
    GasStation,
    GeoPoint,
    RouteLeg,
    RouteResult,
    RouteStep,
    VehicleProfileData,
    WaypointEstimate,
)


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture(autouse=True)
def reset_view_singletons(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("trip_planner.views._model_client", None)
    monkeypatch.setattr("trip_planner.views._planner_service", None)


class FakeModelClient:
    """Answers capability calls by output schema name."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.prompts: list[tuple[str, str]] = []

    async def generate_json(self, prompt: str, schema: type[BaseModel]) -> str:
        self.prompts.append((schema.__name__, prompt))
        response = self.responses[schema.__name__]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)


class FakeGeocoder:
    def __init__(self, points: dict[str, GeoPoint | None]) -> None:
        self.points = points
        self.calls: list[str] = []

    async def geocode(self, location: str) -> GeoPoint:
        self.calls.append(location)
        point = self.points.get(location)
        if point is None:
            raise GeocodeError(f"No coordinates returned for {location!r}")
        return point


class FakeRouteClient:
    def __init__(self, result: RouteResult | None = None, error: str | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[list[GeoPoint]] = []

    async def compute_route(self, points: list[GeoPoint], *, include_steps: bool = True) -> RouteResult:
        self.calls.append(list(points))
        if self.error is not None:
            raise RouteServiceError(self.error)
        assert self.result is not None
        return self.result


class FakeAdvisory:
    def __init__(
        self,
        tips: str = "* Leave early\\n* Carry water",
        stations: list[GasStation] | None = None,
        waypoint: str | None = None,
        distance_km: float | None = None,
        tips_error: Exception | None = None,
        stations_error: Exception | None = None,
        waypoint_error: Exception | None = None,
    ) -> None:
        self.tips = tips
        self.stations = stations if stations is not None else [GasStation("Al-Bireh Fuel", "Al-Bireh")]
        self.waypoint = waypoint
        self.distance_km = distance_km
        self.tips_error = tips_error
        self.stations_error = stations_error
        self.waypoint_error = waypoint_error
        self.tips_calls: list[tuple[str, str, str, str]] = []

    async def get_tips(self, start: str, end: str, distance: str, duration: str) -> str:
        self.tips_calls.append((start, end, distance, duration))
        if self.tips_error is not None:
            raise self.tips_error
        return self.tips

    async def get_gas_stations(self, start: str, end: str) -> list[GasStation]:
        if self.stations_error is not None:
            raise self.stations_error
        return self.stations

    async def estimate_waypoint(self, start: str, end: str) -> WaypointEstimate:
        if self.waypoint_error is not None:
            raise self.waypoint_error
        return WaypointEstimate(distance_km=self.distance_km, waypoint=self.waypoint)


class FakeStore:
    def __init__(self, prices: dict[str, float] | None = None) -> None:
        self.prices = dict(prices or {})
        self.profile: VehicleProfileData | None = None
        self.favorites: dict[int, FavoriteTripData] = {}
        self.consumption: dict[str, float] = {}
        self.fail_on_save = False

    async def get_fuel_price(self, fuel_type: str) -> float | None:
        return self.prices.get(fuel_type)

    async def get_all_fuel_prices(self) -> dict[str, float]:
        return dict(self.prices)

    async def set_fuel_prices(self, prices: dict[str, float]) -> None:
        self.prices.update(prices)

    async def save_vehicle_profile(self, profile: VehicleProfileData) -> None:
        if self.fail_on_save:
            raise RuntimeError("disk full")
        self.profile = profile

    async def get_vehicle_profile(self) -> VehicleProfileData | None:
        return self.profile

    async def list_favorite_trips(self) -> list[FavoriteTripData]:
        return list(self.favorites.values())

    async def save_favorite_trip(self, name: str, start: str, end: str) -> FavoriteTripData:
        trip = FavoriteTripData(id=len(self.favorites) + 1, name=name, start=start, end=end)
        self.favorites[trip.id] = trip
        return trip

    async def delete_favorite_trip(self, trip_id: int) -> bool:
        return self.favorites.pop(trip_id, None) is not None

    async def get_cached_consumption(self, cache_key: str) -> float | None:
        return self.consumption.get(cache_key)

    async def save_cached_consumption(self, cache_key: str, consumption: float) -> None:
        self.consumption[cache_key] = consumption


def make_route(distance: float = 45000.0, duration: float = 3000.0) -> RouteResult:
    return RouteResult(
        distance_meters=distance,
        duration_seconds=duration,
        geometry={"type": "LineString", "coordinates": [[35.2, 31.9], [35.26, 32.22]]},
        legs=[
            RouteLeg(
                steps=[
                    RouteStep("Head north on Main Street", 1300.0),
                    RouteStep("Turn right onto Route 60", 30000.0),
                ]
            ),
            RouteLeg(steps=[RouteStep("Arrive at destination", 0.0)]),
        ],
    )


RAMALLAH = GeoPoint(latitude=31.9038, longitude=35.2034)
NABLUS = GeoPoint(latitude=32.2211, longitude=35.2544)
HUWARA = GeoPoint(latitude=32.1525, longitude=35.2569)
