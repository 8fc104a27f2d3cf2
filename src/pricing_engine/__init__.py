"""Fare pricing engine for airport transfers."""

from .core.exceptions import (
    ClientError,
    ConfigurationError,
    InvalidShapeDefinitionError,
    InvalidSurchargeDefinitionError,
    NoPriceConfiguredError,
    NoRegionCoverageError,
    PricingError,
    UnknownVehicleError,
)
from .pricing import PriceBreakdown, PriceCalculator, PriceRequest
from .quotes import Quote, QuoteRequest, QuoteService, VehicleQuote
from .settings import Settings, get_settings
from .vehicles import Vehicle

__version__ = "0.1.0"

__all__ = [
    "ClientError",
    "ConfigurationError",
    "InvalidShapeDefinitionError",
    "InvalidSurchargeDefinitionError",
    "NoPriceConfiguredError",
    "NoRegionCoverageError",
    "PriceBreakdown",
    "PriceCalculator",
    "PriceRequest",
    "PricingError",
    "Quote",
    "QuoteRequest",
    "QuoteService",
    "Settings",
    "UnknownVehicleError",
    "Vehicle",
    "get_settings",
]
