from __future__ import annotations

from django.db import models


class FuelPrice(models.Model):
    objects = models.Manager["FuelPrice"]()

    fuel_type = models.CharField(max_length=100, unique=True)
    price = models.DecimalField(max_digits=8, decimal_places=3)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("fuel_type",)

    def __str__(self) -> str:
        return f"{self.fuel_type}: {self.price}"


class VehicleProfile(models.Model):
    """Last vehicle used for a successful trip plan. A single row is kept."""

    objects = models.Manager["VehicleProfile"]()

    manufacturer = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100, blank=True)
    year = models.PositiveIntegerField(null=True, blank=True)
    vehicle_class = models.CharField(max_length=50, blank=True)
    consumption = models.FloatField()
    fuel_type = models.CharField(max_length=100)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        name = " ".join(part for part in (self.manufacturer, self.model) if part)
        return f"{name or 'Vehicle'} ({self.consumption} L/100km)"


class FavoriteTrip(models.Model):
    objects = models.Manager["FavoriteTrip"]()

    name = models.CharField(max_length=200)
    start = models.CharField(max_length=300)
    end = models.CharField(max_length=300)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"{self.name} ({self.start} -> {self.end})"


class VehicleConsumption(models.Model):
    objects = models.Manager["VehicleConsumption"]()

    cache_key = models.CharField(max_length=300, unique=True)
    consumption = models.FloatField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = (models.Index(fields=["cache_key"], name="vehicle_consumption_key_idx"),)

    def __str__(self) -> str:
        return f"{self.cache_key}: {self.consumption} L/100km"
