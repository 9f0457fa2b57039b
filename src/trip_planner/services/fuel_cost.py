"""Quick fuel-cost estimate from a model-estimated distance, without routing."""

from __future__ import annotations

import logging
import math

from trip_planner.exceptions import TripPlannerError
from trip_planner.schemas import (
    FuelCostOutcome,
    FuelCostRequest,
    FuelCostResult,
    FuelCostSuccess,
    PlanFailure,
)
from trip_planner.services.advisory import AdvisoryClient
from trip_planner.services.cost import compute_cost, is_valid_price
from trip_planner.services.planner import UNEXPECTED_ERROR
from trip_planner.services.storage import TripStore

logger = logging.getLogger(__name__)

DISTANCE_ERROR = "Could not calculate the distance. Please check the entered locations."
PRICE_ERROR = "The selected fuel type is invalid or has no price."


class FuelCostService:
    def __init__(self, advisory_client: AdvisoryClient, store: TripStore) -> None:
        self.advisory_client = advisory_client
        self.store = store

    async def estimate(self, request: FuelCostRequest) -> FuelCostOutcome:
        try:
            return await self._estimate(request)
        except TripPlannerError as exc:
            logger.warning("Fuel cost estimate failed for %s -> %s: %s", request.start, request.end, exc)
            return PlanFailure(error=str(exc))
        except Exception:
            logger.exception("Unexpected error estimating fuel cost for %s -> %s", request.start, request.end)
            return PlanFailure(error=UNEXPECTED_ERROR)

    async def _estimate(self, request: FuelCostRequest) -> FuelCostOutcome:
        estimate = await self.advisory_client.estimate_waypoint(request.start, request.end)
        distance_km = estimate.distance_km
        if distance_km is None or not math.isfinite(distance_km) or distance_km <= 0:
            logger.warning(
                "No usable distance for %s -> %s: %r", request.start, request.end, distance_km
            )
            return PlanFailure(error=DISTANCE_ERROR)

        fuel_price = request.fuel_price
        if fuel_price is None:
            fuel_price = await self.store.get_fuel_price(request.fuel_type)
        if not is_valid_price(fuel_price):
            return PlanFailure(error=PRICE_ERROR)

        breakdown = compute_cost(distance_km, request.consumption, fuel_price)
        return FuelCostSuccess(
            result=FuelCostResult(
                distance_km=round(distance_km, 2),
                fuel_needed_liters=breakdown.fuel_needed_liters,
                total_cost=breakdown.total_cost,
                fuel_price=fuel_price,
            )
        )
