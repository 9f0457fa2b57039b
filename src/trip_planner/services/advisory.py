from __future__ import annotations

import logging
import re

from django.conf import settings
from pydantic import BaseModel, Field

from trip_planner.exceptions import AdvisoryError, CapabilityError
from trip_planner.services.capability import Capability, ModelClient
from trip_planner.services.types import GasStation, WaypointEstimate

logger = logging.getLogger(__name__)

BULLET = "• "
MIN_SUGGESTION_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 5

_ESCAPED_NEWLINE = re.compile(r"\\n")
_ASTERISK = re.compile(r"\*[ \t]*")

TIPS_PROMPT = """You are a helpful travel assistant for {region}.
Give me travel tips for a car journey from {start} to {end}.
The journey is {distance} and will take approximately {duration}.

Consider the following points in your advice:
- Road conditions
- Potential checkpoints
- Recommended fuel stops if it's a long journey
- The best time to travel to avoid traffic
- Any general safety or travel advice for this specific route.

Use clear, concise points. Format the output as a single string, using * for list items and \\n for newlines.
"""

GAS_STATIONS_PROMPT = """You are a helpful travel assistant for {region}.
List up to 5 major gas stations on the main roads for a car journey from {start} to {end}.

Return ONLY a JSON object with a "stations" array of objects with "name" and "location".
"""

WAYPOINT_PROMPT = """You are a travel assistant for {region}. Estimate the driving distance in kilometers between the start and end points.

Identify a major city that lies on the most logical route between the start and end points, inside {region}, to serve as a waypoint. If the start or end point is a major city itself, you may omit the waypoint.

Start: {start}
End: {end}

Return ONLY a JSON object with "distance_km" and an optional "waypoint".
"""

PLACES_PROMPT = """You are a helpful assistant. Based on the user's query, provide up to 5 autocomplete suggestions for places in {region}.

Query: {query}

Return ONLY a JSON object with a "suggestions" array.
"""


class TravelTipsInput(BaseModel):
    start: str
    end: str
    distance: str
    duration: str


class TravelTipsOutput(BaseModel):
    tips: str


class RouteEndpointsInput(BaseModel):
    start: str
    end: str


class GasStationItem(BaseModel):
    name: str = Field(min_length=1)
    location: str = ""


class GasStationsOutput(BaseModel):
    stations: list[GasStationItem]


class WaypointOutput(BaseModel):
    distance_km: float | None = None
    waypoint: str | None = None


class PlacesInput(BaseModel):
    query: str


class PlacesOutput(BaseModel):
    suggestions: list[str]


class AdvisoryClient:
    def __init__(self, model_client: ModelClient, max_stations: int | None = None) -> None:
        self.max_stations = max_stations or settings.MAX_GAS_STATIONS
        self.tips_capability = Capability(
            "travel_tips", TIPS_PROMPT, TravelTipsInput, TravelTipsOutput, model_client
        )
        self.stations_capability = Capability(
            "gas_stations", GAS_STATIONS_PROMPT, RouteEndpointsInput, GasStationsOutput, model_client
        )
        self.waypoint_capability = Capability(
            "waypoint_estimate", WAYPOINT_PROMPT, RouteEndpointsInput, WaypointOutput, model_client
        )
        self.places_capability = Capability(
            "places_autocomplete", PLACES_PROMPT, PlacesInput, PlacesOutput, model_client
        )

    async def get_tips(self, start: str, end: str, distance: str, duration: str) -> str:
        try:
            output = await self.tips_capability(
                TravelTipsInput(start=start, end=end, distance=distance, duration=duration)
            )
        except CapabilityError as exc:
            raise AdvisoryError(f"Could not get travel tips: {exc}") from exc
        return output.tips

    async def get_gas_stations(self, start: str, end: str) -> list[GasStation]:
        try:
            output = await self.stations_capability(RouteEndpointsInput(start=start, end=end))
        except CapabilityError as exc:
            raise AdvisoryError(f"Could not get gas stations: {exc}") from exc

        return [
            GasStation(name=item.name, location=item.location)
            for item in output.stations[: self.max_stations]
        ]

    async def estimate_waypoint(self, start: str, end: str) -> WaypointEstimate:
        try:
            output = await self.waypoint_capability(RouteEndpointsInput(start=start, end=end))
        except CapabilityError as exc:
            raise AdvisoryError(f"Could not estimate the route: {exc}") from exc

        waypoint = (output.waypoint or "").strip() or None
        return WaypointEstimate(distance_km=output.distance_km, waypoint=waypoint)

    async def suggest_places(self, query: str) -> list[str]:
        if len(query.strip()) < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        try:
            output = await self.places_capability(PlacesInput(query=query.strip()))
        except CapabilityError as exc:
            logger.warning("Place suggestions failed for %r: %s", query, exc)
            return []
        suggestions = [suggestion for suggestion in output.suggestions if suggestion.strip()]
        return suggestions[:MAX_SUGGESTIONS]


def format_tips(raw_tips: str) -> str:
    """Turn raw model tips into display text.

    The model writes line breaks as the two characters ``\\n`` and list items
    with ``*``; every asterisk becomes a bullet.
    """
    text = _ESCAPED_NEWLINE.sub("\n", raw_tips)
    return _ASTERISK.sub(BULLET, text)
