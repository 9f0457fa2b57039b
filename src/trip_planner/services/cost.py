from __future__ import annotations

import math
from numbers import Real

from trip_planner.services.types import CostBreakdown


def compute_cost(
    distance_km: float, consumption_per_100km: float, unit_fuel_price: float
) -> CostBreakdown:
    fuel_needed = (distance_km / 100.0) * consumption_per_100km
    total_cost = fuel_needed * unit_fuel_price
    return CostBreakdown(
        fuel_needed_liters=round(fuel_needed, 2),
        total_cost=round(total_cost, 2),
    )


def is_valid_price(value: object) -> bool:
    """Return True for a finite, non-negative number usable as a unit price."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0
