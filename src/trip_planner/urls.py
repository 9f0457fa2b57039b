from django.urls import path

from trip_planner import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/trip-plan", views.trip_plan_view, name="trip-plan"),
    path("api/v1/fuel-cost", views.fuel_cost_view, name="fuel-cost"),
    path("api/v1/fuel-prices", views.fuel_prices_view, name="fuel-prices"),
    path("api/v1/vehicle-profile", views.vehicle_profile_view, name="vehicle-profile"),
    path("api/v1/vehicle-consumption", views.vehicle_consumption_view, name="vehicle-consumption"),
    path("api/v1/place-suggestions", views.place_suggestions_view, name="place-suggestions"),
    path("api/v1/favorite-trips", views.favorite_trips_view, name="favorite-trips"),
    path(
        "api/v1/favorite-trips/<int:trip_id>",
        views.favorite_trip_detail_view,
        name="favorite-trip-detail",
    ),
]
