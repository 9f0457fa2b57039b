from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from pydantic import BaseModel, ValidationError

from trip_planner.exceptions import AdvisoryError
from trip_planner.schemas import (
    FavoriteTripRequest,
    FavoriteTripResponse,
    FuelCostRequest,
    FuelCostSuccess,
    FuelPricesUpdate,
    PlanSuccess,
    TripPlanRequest,
    VehicleConsumptionQuery,
)
from trip_planner.services.advisory import AdvisoryClient
from trip_planner.services.capability import GeminiModelClient, ModelClient
from trip_planner.services.consumption import VehicleConsumptionService
from trip_planner.services.fuel_cost import FuelCostService
from trip_planner.services.planner import TripPlannerService, build_trip_planner
from trip_planner.services.storage import DjangoTripStore, TripStore

logger = logging.getLogger(__name__)

_model_client: ModelClient | None = None
_planner_service: TripPlannerService | None = None


def get_store() -> TripStore:
    return DjangoTripStore()


def get_model_client() -> ModelClient:
    global _model_client
    if _model_client is None:
        _model_client = GeminiModelClient()
    return _model_client


def get_trip_planner() -> TripPlannerService:
    global _planner_service
    if _planner_service is None:
        _planner_service = build_trip_planner(DjangoTripStore(), get_model_client())
    return _planner_service


def get_advisory_client() -> AdvisoryClient:
    return AdvisoryClient(get_model_client())


def get_consumption_service() -> VehicleConsumptionService:
    return VehicleConsumptionService(get_model_client(), get_store())


def get_fuel_cost_service() -> FuelCostService:
    return FuelCostService(get_advisory_client(), get_store())


@require_GET
async def health_view(_: HttpRequest) -> HttpResponse:
    prices = await get_store().get_all_fuel_prices()
    return JsonResponse({"status": "ok", "fuel_types": len(prices)})


@csrf_exempt
@require_POST
async def trip_plan_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    trip_request = _validate(TripPlanRequest, payload)
    if isinstance(trip_request, JsonResponse):
        return trip_request

    fuel_price = trip_request.fuel_price
    if fuel_price is None:
        fuel_price = await get_store().get_fuel_price(trip_request.fuel_type)
        if fuel_price is None:
            logger.info("No fuel price stored for %r, planning without cost", trip_request.fuel_type)

    outcome = await get_trip_planner().plan(trip_request, fuel_price)
    status = 200 if isinstance(outcome, PlanSuccess) else 502
    return JsonResponse(outcome.model_dump(mode="json", exclude_none=True), status=status)


@csrf_exempt
@require_POST
async def fuel_cost_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    cost_request = _validate(FuelCostRequest, payload)
    if isinstance(cost_request, JsonResponse):
        return cost_request

    outcome = await get_fuel_cost_service().estimate(cost_request)
    status = 200 if isinstance(outcome, FuelCostSuccess) else 502
    return JsonResponse(outcome.model_dump(mode="json"), status=status)


@csrf_exempt
@require_http_methods(["GET", "PUT"])
async def fuel_prices_view(request: HttpRequest) -> HttpResponse:
    store = get_store()
    if request.method == "PUT":
        payload = _parse_json_payload(request)
        if isinstance(payload, JsonResponse):
            return payload
        update = _validate(FuelPricesUpdate, payload)
        if isinstance(update, JsonResponse):
            return update
        await store.set_fuel_prices(update.prices)

    return JsonResponse({"prices": await store.get_all_fuel_prices()})


@require_GET
async def vehicle_profile_view(_: HttpRequest) -> HttpResponse:
    profile = await get_store().get_vehicle_profile()
    if profile is None:
        return _error_response("not_found", "No vehicle profile saved yet", status=404)

    return JsonResponse(
        {
            "manufacturer": profile.manufacturer,
            "model": profile.model,
            "year": profile.year,
            "vehicle_class": profile.vehicle_class,
            "consumption": profile.consumption,
            "fuel_type": profile.fuel_type,
        }
    )


@require_GET
async def vehicle_consumption_view(request: HttpRequest) -> HttpResponse:
    query = _validate(VehicleConsumptionQuery, request.GET.dict())
    if isinstance(query, JsonResponse):
        return query

    try:
        estimate = await get_consumption_service().get_consumption(
            query.manufacturer, query.model, query.year
        )
    except AdvisoryError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    return JsonResponse({"consumption": estimate.consumption, "source": estimate.source})


@require_GET
async def place_suggestions_view(request: HttpRequest) -> HttpResponse:
    suggestions = await get_advisory_client().suggest_places(request.GET.get("q", ""))
    return JsonResponse({"suggestions": suggestions})


@csrf_exempt
@require_http_methods(["GET", "POST"])
async def favorite_trips_view(request: HttpRequest) -> HttpResponse:
    store = get_store()
    if request.method == "POST":
        payload = _parse_json_payload(request)
        if isinstance(payload, JsonResponse):
            return payload
        favorite = _validate(FavoriteTripRequest, payload)
        if isinstance(favorite, JsonResponse):
            return favorite

        trip = await store.save_favorite_trip(
            favorite.name or f"{favorite.start} to {favorite.end}",
            favorite.start,
            favorite.end,
        )
        return JsonResponse(_favorite_payload(trip), status=201)

    trips = await store.list_favorite_trips()
    return JsonResponse({"trips": [_favorite_payload(trip) for trip in trips]})


@csrf_exempt
@require_http_methods(["DELETE"])
async def favorite_trip_detail_view(_: HttpRequest, trip_id: int) -> HttpResponse:
    if not await get_store().delete_favorite_trip(trip_id):
        return _error_response("not_found", "Favorite trip not found", status=404)
    return HttpResponse(status=204)


def _favorite_payload(trip: Any) -> dict[str, Any]:
    return FavoriteTripResponse(id=trip.id, name=trip.name, start=trip.start, end=trip.end).model_dump()


def _validate(schema: type[BaseModel], payload: dict[str, Any]) -> Any:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
