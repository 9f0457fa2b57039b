from __future__ import annotations

import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TripPlanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    start: str = Field(min_length=2, max_length=300)
    end: str = Field(min_length=2, max_length=300)
    consumption: float = Field(gt=0.0, le=100.0)
    fuel_type: str = Field(min_length=1, max_length=100)
    fuel_price: float | None = Field(default=None, ge=0.0)
    manufacturer: str = Field(default="", max_length=100)
    model: str = Field(default="", max_length=100)
    year: int | None = Field(default=None, ge=1980)
    vehicle_class: str = Field(default="", max_length=50)

    @field_validator("year")
    @classmethod
    def _year_not_in_future(cls, value: int | None) -> int | None:
        if value is not None and value > datetime.date.today().year + 1:
            raise ValueError("Manufacturing year cannot be in the future")
        return value


class StepResponse(BaseModel):
    instruction: str
    distance: str


class GasStationResponse(BaseModel):
    name: str
    location: str


class CostResponse(BaseModel):
    fuel_needed_liters: float
    total_cost: float
    fuel_price: float


class TripPlanResult(BaseModel):
    distance: str
    duration: str
    distance_km: float
    duration_minutes: int
    steps: list[StepResponse]
    tips: str
    route_geometry: Any
    gas_stations: list[GasStationResponse]
    cost: CostResponse | None = None
    waypoint: str | None = None


class PlanSuccess(BaseModel):
    success: Literal[True] = True
    data: TripPlanResult


class PlanFailure(BaseModel):
    success: Literal[False] = False
    error: str


PlanOutcome = PlanSuccess | PlanFailure


# Fits FuelPrice.price, a DecimalField(max_digits=8, decimal_places=3).
UnitPrice = Annotated[float, Field(gt=0.0, le=99_999.0, allow_inf_nan=False)]


class FuelPricesUpdate(BaseModel):
    prices: dict[str, UnitPrice] = Field(min_length=1)

    @field_validator("prices")
    @classmethod
    def _fuel_types_named(cls, value: dict[str, float]) -> dict[str, float]:
        if any(not fuel_type.strip() for fuel_type in value):
            raise ValueError("Fuel type must not be empty")
        return value


class FavoriteTripRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(default="", max_length=200)
    start: str = Field(min_length=2, max_length=300)
    end: str = Field(min_length=2, max_length=300)


class FavoriteTripResponse(BaseModel):
    id: int
    name: str
    start: str
    end: str


class VehicleConsumptionQuery(BaseModel):
    manufacturer: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1980, le=2100)


class FuelCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    start: str = Field(min_length=2, max_length=300)
    end: str = Field(min_length=2, max_length=300)
    consumption: float = Field(gt=0.0, le=100.0)
    fuel_type: str = Field(min_length=1, max_length=100)
    fuel_price: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)


class FuelCostResult(BaseModel):
    distance_km: float
    fuel_needed_liters: float
    total_cost: float
    fuel_price: float


class FuelCostSuccess(BaseModel):
    success: Literal[True] = True
    result: FuelCostResult


FuelCostOutcome = FuelCostSuccess | PlanFailure
