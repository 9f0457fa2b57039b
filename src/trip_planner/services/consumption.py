from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from trip_planner.exceptions import AdvisoryError, CapabilityError
from trip_planner.services.capability import Capability, ModelClient
from trip_planner.services.storage import TripStore
from trip_planner.services.types import ConsumptionEstimate

logger = logging.getLogger(__name__)

CONSUMPTION_PROMPT = """You are a vehicle expert. Based on the manufacturer, model, and year, provide an accurate estimate for the fuel consumption in liters per 100 kilometers (L/100km).

Vehicle Manufacturer: {manufacturer}
Vehicle Model: {model}
Vehicle Year: {year}

Return ONLY a JSON object with the key "consumption".
"""


class ConsumptionInput(BaseModel):
    manufacturer: str
    model: str
    year: int


class ConsumptionOutput(BaseModel):
    consumption: float = Field(gt=0.0, le=100.0)


class VehicleConsumptionService:
    def __init__(self, model_client: ModelClient, store: TripStore) -> None:
        self.store = store
        self.capability = Capability(
            "vehicle_consumption",
            CONSUMPTION_PROMPT,
            ConsumptionInput,
            ConsumptionOutput,
            model_client,
        )

    async def get_consumption(self, manufacturer: str, model: str, year: int) -> ConsumptionEstimate:
        key = self.cache_key(manufacturer, model, year)
        cached = await self.store.get_cached_consumption(key)
        if cached is not None:
            return ConsumptionEstimate(consumption=cached, source="cache")

        try:
            output = await self.capability(
                ConsumptionInput(manufacturer=manufacturer, model=model, year=year)
            )
        except CapabilityError as exc:
            raise AdvisoryError(f"Could not estimate fuel consumption: {exc}") from exc

        await self.store.save_cached_consumption(key, output.consumption)
        logger.info("Cached AI consumption estimate for %s: %s", key, output.consumption)
        return ConsumptionEstimate(consumption=output.consumption, source="ai")

    @staticmethod
    def cache_key(manufacturer: str, model: str, year: int) -> str:
        return f"{manufacturer.strip()}-{model.strip()}-{year}".lower()
