from .errors import (
    ConfigurationError,
    ErrorKind,
    InvalidRequest,
    MalformedResponse,
    PlannerError,
    ServiceOverloaded,
    UpstreamError,
)
from .extractor import extract_json
from .models import DayPlan, Itinerary, ItineraryRequest
from .normalizer import normalize_itinerary
from .planner import TripPlanner

__all__ = [
    "ConfigurationError",
    "DayPlan",
    "ErrorKind",
    "InvalidRequest",
    "Itinerary",
    "ItineraryRequest",
    "MalformedResponse",
    "PlannerError",
    "ServiceOverloaded",
    "TripPlanner",
    "UpstreamError",
    "extract_json",
    "normalize_itinerary",
]
