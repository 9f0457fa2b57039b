from __future__ import annotations

import asyncio
import math

import pytest
from conftest import FakeAdvisory, FakeStore

from trip_planner.exceptions import AdvisoryError
from trip_planner.schemas import FuelCostRequest, FuelCostSuccess, PlanFailure
from trip_planner.services.fuel_cost import DISTANCE_ERROR, PRICE_ERROR, FuelCostService
from trip_planner.services.planner import UNEXPECTED_ERROR


def _request(**overrides) -> FuelCostRequest:
    values = {"start": "Ramallah", "end": "Nablus", "consumption": 8, "fuel_type": "Gasoline 95"}
    values.update(overrides)
    return FuelCostRequest(**values)


def _estimate(advisory: FakeAdvisory, store: FakeStore | None = None, **overrides):
    service = FuelCostService(advisory, store or FakeStore({"Gasoline 95": 6.94}))
    return asyncio.run(service.estimate(_request(**overrides)))


def test_cost_from_estimated_distance_and_stored_price() -> None:
    outcome = _estimate(FakeAdvisory(distance_km=45.0))

    assert isinstance(outcome, FuelCostSuccess)
    assert outcome.result.distance_km == 45.0
    assert outcome.result.fuel_needed_liters == pytest.approx(3.60)
    assert outcome.result.total_cost == pytest.approx(24.98)
    assert outcome.result.fuel_price == 6.94


def test_distance_is_rounded_to_two_decimals() -> None:
    outcome = _estimate(FakeAdvisory(distance_km=48.456))

    assert isinstance(outcome, FuelCostSuccess)
    assert outcome.result.distance_km == 48.46
    assert outcome.result.fuel_needed_liters == pytest.approx(3.88)
    assert outcome.result.total_cost == pytest.approx(26.9)


def test_explicit_price_overrides_store() -> None:
    outcome = _estimate(FakeAdvisory(distance_km=100.0), fuel_price=5.0)

    assert isinstance(outcome, FuelCostSuccess)
    assert outcome.result.total_cost == pytest.approx(40.0)
    assert outcome.result.fuel_price == 5.0


@pytest.mark.parametrize("distance_km", [None, 0.0, -12.0, math.inf])
def test_missing_or_non_positive_distance_is_rejected(distance_km) -> None:
    outcome = _estimate(FakeAdvisory(distance_km=distance_km))

    assert outcome == PlanFailure(error=DISTANCE_ERROR)


def test_unknown_fuel_type_is_rejected() -> None:
    outcome = _estimate(FakeAdvisory(distance_km=45.0), fuel_type="Hydrogen")

    assert outcome == PlanFailure(error=PRICE_ERROR)


def test_advisory_failure_returns_its_message() -> None:
    advisory = FakeAdvisory(waypoint_error=AdvisoryError("Could not estimate the route: quota"))

    outcome = _estimate(advisory)

    assert outcome == PlanFailure(error="Could not estimate the route: quota")


def test_unexpected_error_is_reported_generically() -> None:
    outcome = _estimate(FakeAdvisory(waypoint_error=KeyError("distance_km")))

    assert outcome == PlanFailure(error=UNEXPECTED_ERROR)
