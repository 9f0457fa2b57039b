from __future__ import annotations

import logging
from typing import Any

import httpx
from django.conf import settings

from trip_planner.exceptions import RouteServiceError
from trip_planner.services.types import GeoPoint, RouteLeg, RouteResult, RouteStep

logger = logging.getLogger(__name__)

METERS_PER_KILOMETER = 1000.0
NO_ROUTE_MESSAGE = "No route found between the given points"


class OsrmClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.OSRM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.OSRM_TIMEOUT_SECONDS
        self.http_client = http_client

    async def compute_route(
        self, points: list[GeoPoint], *, include_steps: bool = True
    ) -> RouteResult:
        if len(points) < 2:
            raise RouteServiceError("At least two route points are required")

        coordinates = ";".join(f"{point.longitude:.6f},{point.latitude:.6f}" for point in points)
        endpoint = f"{self.base_url}/route/v1/driving/{coordinates}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "true" if include_steps else "false",
        }

        try:
            response = await self._get(endpoint, params)
        except httpx.HTTPError as exc:
            logger.warning("OSRM request failed: %s", exc)
            raise RouteServiceError(f"Routing service request failed: {exc}") from exc

        if response.is_error:
            raise RouteServiceError(self._error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise RouteServiceError("Routing service returned invalid JSON") from exc

        return self._parse_response(payload)

    async def _get(self, endpoint: str, params: dict[str, str]) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.get(endpoint, params=params, timeout=self.timeout)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(endpoint, params=params)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return f"Routing service error: {response.status_code} {response.reason_phrase}".strip()

    @staticmethod
    def _parse_response(payload: Any) -> RouteResult:
        if not isinstance(payload, dict):
            raise RouteServiceError("Routing service returned an unexpected response")

        routes = payload.get("routes") or []
        if payload.get("code") != "Ok" or not routes:
            raise RouteServiceError(str(payload.get("message") or NO_ROUTE_MESSAGE))

        first = routes[0]
        legs = [
            RouteLeg(
                steps=[
                    RouteStep(
                        instruction=_describe_step(step),
                        distance_meters=_number(step, "distance"),
                    )
                    for step in leg.get("steps") or []
                ]
            )
            for leg in first.get("legs") or []
        ]

        return RouteResult(
            distance_meters=_number(first, "distance"),
            duration_seconds=_number(first, "duration"),
            geometry=first.get("geometry"),
            legs=legs,
        )


def format_distance_km(distance_meters: float) -> str:
    return f"{distance_meters / METERS_PER_KILOMETER:.1f} km"


def format_duration(duration_seconds: float) -> str:
    total_minutes = round(duration_seconds / 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def _number(item: dict[str, Any], key: str) -> float:
    value = item.get(key)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RouteServiceError(f"Routing service returned an invalid {key}: {value!r}") from exc


def _describe_step(step: dict[str, Any]) -> str:
    maneuver = step.get("maneuver") or {}
    if maneuver.get("instruction"):
        return str(maneuver["instruction"])

    # The public OSRM demo server has no text instructions, only maneuver types.
    parts = [str(maneuver.get("type", "continue")).replace("_", " ")]
    if maneuver.get("modifier"):
        parts.append(str(maneuver["modifier"]))
    if step.get("name"):
        parts.append(f"onto {step['name']}")
    text = " ".join(parts)
    return text[:1].upper() + text[1:]
