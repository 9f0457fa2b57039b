class TripPlannerError(Exception):
    """Base exception for trip planning errors."""


class GeocodeError(TripPlannerError):
    """Raised when a location cannot be resolved to valid coordinates."""


class RouteServiceError(TripPlannerError):
    """Raised when the routing service fails or reports no route."""


class AdvisoryError(TripPlannerError):
    """Raised when travel tips, gas stations or estimates cannot be produced."""


class CapabilityError(TripPlannerError):
    """Base exception for AI capability calls."""


class ProviderError(CapabilityError):
    """Raised when the model provider call fails."""


class SchemaViolationError(CapabilityError):
    """Raised when the model output does not match the expected schema."""
