"""Price configuration records: base (distance/time) prices and fixed route prices."""

from datetime import UTC, datetime, tzinfo
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

from ..core.money import coerce_float


def _assume_utc(value: datetime) -> datetime:
    # Stored configuration datetimes without an offset are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def localize(moment: datetime, timezone: tzinfo = UTC) -> datetime:
    """Express a booking time in the engine timezone.

    Naive datetimes are taken to be local already; aware ones are converted.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone)
    return moment.astimezone(timezone)


UTCDatetime = Annotated[datetime, AfterValidator(_assume_utc)]
Money = Annotated[Decimal, BeforeValidator(coerce_float), Field(ge=0)]
Currency = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_upper=True, pattern=r"^[A-Za-z]{3}$"),
]


class ValidityWindow(BaseModel):
    """Optional [valid_from, valid_until] window, both bounds inclusive."""

    model_config = ConfigDict(frozen=True)

    valid_from: UTCDatetime | None = None
    valid_until: UTCDatetime | None = None

    def is_valid_at(self, at: datetime) -> bool:
        """Check the window against an aware datetime."""
        if self.valid_from is not None and at < self.valid_from:
            return False
        if self.valid_until is not None and at > self.valid_until:
            return False
        return True


class VehiclePricing(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    base_fare: Money
    price_per_km: Money
    price_per_minute: Money
    minimum_fare: Money


class BasePrice(ValidityWindow):
    """Distance/time fare table for one region, one entry per vehicle."""

    id: str
    region_id: str
    currency: Currency
    vehicle_prices: list[VehiclePricing] = Field(default_factory=list)
    is_active: bool = True
    created_at: UTCDatetime | None = None

    def pricing_for(self, vehicle_id: str) -> VehiclePricing | None:
        return next((vp for vp in self.vehicle_prices if vp.vehicle_id == vehicle_id), None)


class VehicleFixedPricing(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    fixed_price: Money
    included_waiting_time: int = Field(default=15, ge=0, description="Minutes")
    additional_waiting_price: Money | None = None


class FixedPrice(ValidityWindow):
    """Flat fare for an origin region to destination region route."""

    id: str
    origin_region_id: str
    destination_region_id: str
    name: str
    currency: Currency
    vehicle_prices: list[VehicleFixedPricing] = Field(default_factory=list)
    priority: int = 0
    is_active: bool = True
    tags: frozenset[str] = frozenset()
    estimated_distance_km: Money | None = None
    estimated_duration_minutes: Money | None = None
    description: str | None = None
    created_at: UTCDatetime | None = None

    def pricing_for(self, vehicle_id: str) -> VehicleFixedPricing | None:
        return next((vp for vp in self.vehicle_prices if vp.vehicle_id == vehicle_id), None)
