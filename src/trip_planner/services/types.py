from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class RouteStep:
    instruction: str
    distance_meters: float


@dataclass(slots=True, frozen=True)
class RouteLeg:
    steps: list[RouteStep] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class RouteResult:
    distance_meters: float
    duration_seconds: float
    geometry: Any
    legs: list[RouteLeg]


@dataclass(slots=True, frozen=True)
class GasStation:
    name: str
    location: str


@dataclass(slots=True, frozen=True)
class CostBreakdown:
    fuel_needed_liters: float
    total_cost: float


@dataclass(slots=True, frozen=True)
class WaypointEstimate:
    distance_km: float | None
    waypoint: str | None


@dataclass(slots=True, frozen=True)
class VehicleProfileData:
    consumption: float
    fuel_type: str
    manufacturer: str = ""
    model: str = ""
    year: int | None = None
    vehicle_class: str = ""


@dataclass(slots=True, frozen=True)
class ConsumptionEstimate:
    consumption: float
    source: str


@dataclass(slots=True, frozen=True)
class FavoriteTripData:
    id: int
    name: str
    start: str
    end: str
