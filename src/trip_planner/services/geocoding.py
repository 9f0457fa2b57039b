from __future__ import annotations

import math

from pydantic import BaseModel

from trip_planner.exceptions import CapabilityError, GeocodeError
from trip_planner.services.capability import Capability, ModelClient
from trip_planner.services.types import GeoPoint

GEOCODE_PROMPT = """You are a geocoding assistant. Find the latitude and longitude for the given location in {region}.

Location: {location}

Return ONLY a JSON object with "latitude" and "longitude".
"""


class GeocodeInput(BaseModel):
    location: str


class GeocodeOutput(BaseModel):
    latitude: float | None = None
    longitude: float | None = None


class GeocodingClient:
    def __init__(self, model_client: ModelClient) -> None:
        self.capability = Capability(
            name="geocode",
            prompt_template=GEOCODE_PROMPT,
            input_model=GeocodeInput,
            output_model=GeocodeOutput,
            client=model_client,
        )

    async def geocode(self, location: str) -> GeoPoint:
        query = location.strip()
        if not query:
            raise GeocodeError("Location must not be empty")

        try:
            output = await self.capability(GeocodeInput(location=query))
        except CapabilityError as exc:
            raise GeocodeError(f"Could not geocode {query!r}") from exc

        return self._parse_result(output, query)

    @staticmethod
    def _parse_result(output: GeocodeOutput, query: str) -> GeoPoint:
        latitude = output.latitude
        longitude = output.longitude
        if latitude is None or longitude is None:
            raise GeocodeError(f"No coordinates returned for {query!r}")
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise GeocodeError(f"Invalid coordinates returned for {query!r}")
        if abs(latitude) > 90 or abs(longitude) > 180:
            raise GeocodeError(f"Coordinates out of range for {query!r}")

        return GeoPoint(latitude=latitude, longitude=longitude)
