"""Standardized exception hierarchy for the pricing engine."""

from typing import Any


class PricingError(Exception):
    """Base exception for all pricing errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ClientError(PricingError):
    """Client-correctable errors. The caller must change the request; never retried."""

    pass


class NoRegionCoverageError(ClientError):
    """Trip origin is not covered by any active price region."""

    pass


class NoPriceConfiguredError(ClientError):
    """No fixed route matched and no active base price exists for the vehicle."""

    pass


class UnknownVehicleError(ClientError):
    """Requested vehicle is not in the catalog."""

    pass


class ConfigurationError(PricingError):
    """Invalid pricing configuration, raised when configuration is written."""

    pass


class InvalidShapeDefinitionError(ConfigurationError):
    """Malformed circle or polygon region shape."""

    pass


class InvalidSurchargeDefinitionError(ConfigurationError):
    """Surcharge missing its type-specific fields or with conflicting ranges."""

    pass
