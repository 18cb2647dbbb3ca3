"""Response schemas for the premium quote boundary."""

from .premium import (
    HTTP_STATUS_BY_RESPONSE,
    PersonSummary,
    PremiumResponse,
    PricingDetails,
    PricingSummary,
    ResponseStatus,
    TripSummary,
    UnderwritingInfo,
    status_for_decision,
)

__all__ = [
    "HTTP_STATUS_BY_RESPONSE",
    "PersonSummary",
    "PremiumResponse",
    "PricingDetails",
    "PricingSummary",
    "ResponseStatus",
    "TripSummary",
    "UnderwritingInfo",
    "status_for_decision",
]
