from django.contrib import admin

from trip_planner.models import FavoriteTrip, FuelPrice, VehicleConsumption, VehicleProfile


@admin.register(FuelPrice)
class FuelPriceAdmin(admin.ModelAdmin):
    list_display = ("fuel_type", "price", "updated_at")
    search_fields = ("fuel_type",)
    ordering = ("fuel_type",)


@admin.register(VehicleProfile)
class VehicleProfileAdmin(admin.ModelAdmin):
    list_display = ("manufacturer", "model", "year", "consumption", "fuel_type", "updated_at")


@admin.register(FavoriteTrip)
class FavoriteTripAdmin(admin.ModelAdmin):
    list_display = ("name", "start", "end", "created_at")
    search_fields = ("name", "start", "end")


@admin.register(VehicleConsumption)
class VehicleConsumptionAdmin(admin.ModelAdmin):
    list_display = ("cache_key", "consumption", "created_at")
    search_fields = ("cache_key",)
