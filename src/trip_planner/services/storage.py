"""Persistence collaborator for fuel prices, the vehicle profile and favorite trips.

The planner only depends on :class:`TripStore`; :class:`DjangoTripStore` is
the ORM-backed implementation the web process injects.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from django.conf import settings

from trip_planner.models import FavoriteTrip, FuelPrice, VehicleConsumption, VehicleProfile
from trip_planner.services.types import FavoriteTripData, VehicleProfileData

VEHICLE_PROFILE_PK = 1


class TripStore(Protocol):
    async def get_fuel_price(self, fuel_type: str) -> float | None: ...

    async def get_all_fuel_prices(self) -> dict[str, float]: ...

    async def set_fuel_prices(self, prices: dict[str, float]) -> None: ...

    async def save_vehicle_profile(self, profile: VehicleProfileData) -> None: ...

    async def get_vehicle_profile(self) -> VehicleProfileData | None: ...

    async def list_favorite_trips(self) -> list[FavoriteTripData]: ...

    async def save_favorite_trip(self, name: str, start: str, end: str) -> FavoriteTripData: ...

    async def delete_favorite_trip(self, trip_id: int) -> bool: ...

    async def get_cached_consumption(self, cache_key: str) -> float | None: ...

    async def save_cached_consumption(self, cache_key: str, consumption: float) -> None: ...


class DjangoTripStore:
    def __init__(self, default_prices: dict[str, float] | None = None) -> None:
        self.default_prices = (
            default_prices if default_prices is not None else dict(settings.DEFAULT_FUEL_PRICES)
        )

    async def get_fuel_price(self, fuel_type: str) -> float | None:
        await self._ensure_default_prices()
        row = await FuelPrice.objects.filter(fuel_type=fuel_type).afirst()
        return float(row.price) if row is not None else None

    async def get_all_fuel_prices(self) -> dict[str, float]:
        await self._ensure_default_prices()
        return {row.fuel_type: float(row.price) async for row in FuelPrice.objects.all()}

    async def set_fuel_prices(self, prices: dict[str, float]) -> None:
        for fuel_type, price in prices.items():
            await FuelPrice.objects.aupdate_or_create(
                fuel_type=fuel_type,
                defaults={"price": Decimal(str(price))},
            )

    async def save_vehicle_profile(self, profile: VehicleProfileData) -> None:
        await VehicleProfile.objects.aupdate_or_create(
            pk=VEHICLE_PROFILE_PK,
            defaults={
                "manufacturer": profile.manufacturer,
                "model": profile.model,
                "year": profile.year,
                "vehicle_class": profile.vehicle_class,
                "consumption": profile.consumption,
                "fuel_type": profile.fuel_type,
            },
        )

    async def get_vehicle_profile(self) -> VehicleProfileData | None:
        row = await VehicleProfile.objects.filter(pk=VEHICLE_PROFILE_PK).afirst()
        if row is None:
            return None
        return VehicleProfileData(
            consumption=row.consumption,
            fuel_type=row.fuel_type,
            manufacturer=row.manufacturer,
            model=row.model,
            year=row.year,
            vehicle_class=row.vehicle_class,
        )

    async def list_favorite_trips(self) -> list[FavoriteTripData]:
        return [_favorite_to_data(row) async for row in FavoriteTrip.objects.all()]

    async def save_favorite_trip(self, name: str, start: str, end: str) -> FavoriteTripData:
        row = await FavoriteTrip.objects.acreate(name=name, start=start, end=end)
        return _favorite_to_data(row)

    async def delete_favorite_trip(self, trip_id: int) -> bool:
        deleted, _ = await FavoriteTrip.objects.filter(pk=trip_id).adelete()
        return deleted > 0

    async def get_cached_consumption(self, cache_key: str) -> float | None:
        row = await VehicleConsumption.objects.filter(cache_key=cache_key).afirst()
        return row.consumption if row is not None else None

    async def save_cached_consumption(self, cache_key: str, consumption: float) -> None:
        await VehicleConsumption.objects.aupdate_or_create(
            cache_key=cache_key,
            defaults={"consumption": consumption},
        )

    async def _ensure_default_prices(self) -> None:
        if await FuelPrice.objects.aexists():
            return
        await FuelPrice.objects.abulk_create(
            [
                FuelPrice(fuel_type=fuel_type, price=Decimal(str(price)))
                for fuel_type, price in self.default_prices.items()
            ],
            ignore_conflicts=True,
        )


def _favorite_to_data(row: FavoriteTrip) -> FavoriteTripData:
    return FavoriteTripData(id=row.pk, name=row.name, start=row.start, end=row.end)
