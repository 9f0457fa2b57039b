from __future__ import annotations

import logging

from django.conf import settings

from trip_planner.exceptions import GeocodeError, TripPlannerError
from trip_planner.schemas import (
    CostResponse,
    GasStationResponse,
    PlanFailure,
    PlanOutcome,
    PlanSuccess,
    StepResponse,
    TripPlanRequest,
    TripPlanResult,
)
from trip_planner.services.advisory import AdvisoryClient, format_tips
from trip_planner.services.capability import GeminiModelClient, ModelClient
from trip_planner.services.concurrency import JoinPolicy, gather_all
from trip_planner.services.cost import compute_cost, is_valid_price
from trip_planner.services.geocoding import GeocodingClient
from trip_planner.services.osrm import (
    METERS_PER_KILOMETER,
    OsrmClient,
    format_distance_km,
    format_duration,
)
from trip_planner.services.storage import TripStore
from trip_planner.services.types import GeoPoint, RouteResult, VehicleProfileData

logger = logging.getLogger(__name__)

LOCATION_ERROR = "Could not determine location."
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."


class TripPlannerService:
    def __init__(
        self,
        geocoding_client: GeocodingClient,
        osrm_client: OsrmClient,
        advisory_client: AdvisoryClient,
        store: TripStore,
        *,
        estimate_waypoints: bool | None = None,
        join_policy: JoinPolicy = JoinPolicy.WAIT_ALL,
    ) -> None:
        self.geocoding_client = geocoding_client
        self.osrm_client = osrm_client
        self.advisory_client = advisory_client
        self.store = store
        self.estimate_waypoints = (
            settings.ESTIMATE_WAYPOINTS if estimate_waypoints is None else estimate_waypoints
        )
        self.join_policy = join_policy

    async def plan(self, request: TripPlanRequest, fuel_price: float | None) -> PlanOutcome:
        """Plan a trip, returning either the full result or a single error message."""
        try:
            result = await self._plan(request, fuel_price)
        except GeocodeError as exc:
            logger.warning("Geocoding failed for %s -> %s: %s", request.start, request.end, exc)
            return PlanFailure(error=LOCATION_ERROR)
        except TripPlannerError as exc:
            logger.warning("Trip planning failed for %s -> %s: %s", request.start, request.end, exc)
            return PlanFailure(error=str(exc))
        except Exception:
            logger.exception("Unexpected error planning %s -> %s", request.start, request.end)
            return PlanFailure(error=UNEXPECTED_ERROR)

        await self._remember_vehicle(request)
        return PlanSuccess(data=result)

    async def _plan(self, request: TripPlanRequest, fuel_price: float | None) -> TripPlanResult:
        waypoint = await self._estimate_waypoint(request)
        locations = [request.start, *([waypoint] if waypoint else []), request.end]

        points = await self._geocode_all(locations)
        logger.info("Resolved %d locations for %s -> %s", len(points), request.start, request.end)

        route = await self.osrm_client.compute_route(points, include_steps=True)

        distance = format_distance_km(route.distance_meters)
        duration = format_duration(route.duration_seconds)
        distance_km = route.distance_meters / METERS_PER_KILOMETER

        raw_tips, stations = await gather_all(
            self.advisory_client.get_tips(request.start, request.end, distance, duration),
            self.advisory_client.get_gas_stations(request.start, request.end),
            policy=self.join_policy,
        )

        cost = None
        if is_valid_price(fuel_price):
            breakdown = compute_cost(distance_km, request.consumption, fuel_price)
            cost = CostResponse(
                fuel_needed_liters=breakdown.fuel_needed_liters,
                total_cost=breakdown.total_cost,
                fuel_price=fuel_price,
            )

        return TripPlanResult(
            distance=distance,
            duration=duration,
            distance_km=round(distance_km, 1),
            duration_minutes=round(route.duration_seconds / 60),
            steps=self._flatten_steps(route),
            tips=format_tips(raw_tips),
            route_geometry=route.geometry,
            gas_stations=[
                GasStationResponse(name=station.name, location=station.location)
                for station in stations
            ],
            cost=cost,
            waypoint=waypoint,
        )

    async def _estimate_waypoint(self, request: TripPlanRequest) -> str | None:
        if not self.estimate_waypoints:
            return None

        estimate = await self.advisory_client.estimate_waypoint(request.start, request.end)
        waypoint = estimate.waypoint
        if waypoint is None or waypoint.casefold() in {
            request.start.casefold(),
            request.end.casefold(),
        }:
            return None

        logger.info("Routing %s -> %s through %s", request.start, request.end, waypoint)
        return waypoint

    async def _geocode_all(self, locations: list[str]) -> list[GeoPoint]:
        return await gather_all(
            *(self.geocoding_client.geocode(location) for location in locations),
            policy=self.join_policy,
        )

    @staticmethod
    def _flatten_steps(route: RouteResult) -> list[StepResponse]:
        return [
            StepResponse(
                instruction=step.instruction,
                distance=format_distance_km(step.distance_meters),
            )
            for leg in route.legs
            for step in leg.steps
        ]

    async def _remember_vehicle(self, request: TripPlanRequest) -> None:
        profile = VehicleProfileData(
            consumption=request.consumption,
            fuel_type=request.fuel_type,
            manufacturer=request.manufacturer,
            model=request.model,
            year=request.year,
            vehicle_class=request.vehicle_class,
        )
        try:
            await self.store.save_vehicle_profile(profile)
        except Exception:
            logger.exception("Could not save vehicle profile")


def build_trip_planner(store: TripStore, model_client: ModelClient | None = None) -> TripPlannerService:
    client = model_client or GeminiModelClient()
    return TripPlannerService(
        geocoding_client=GeocodingClient(client),
        osrm_client=OsrmClient(),
        advisory_client=AdvisoryClient(client),
        store=store,
    )
