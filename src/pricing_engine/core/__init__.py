from .exceptions import (
    ClientError,
    ConfigurationError,
    InvalidShapeDefinitionError,
    InvalidSurchargeDefinitionError,
    NoPriceConfiguredError,
    NoRegionCoverageError,
    PricingError,
    UnknownVehicleError,
)
from .money import round_money, to_decimal

__all__ = [
    "PricingError",
    "ClientError",
    "NoRegionCoverageError",
    "NoPriceConfiguredError",
    "UnknownVehicleError",
    "ConfigurationError",
    "InvalidShapeDefinitionError",
    "InvalidSurchargeDefinitionError",
    "round_money",
    "to_decimal",
]
