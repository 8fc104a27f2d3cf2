"""Request and result models for a single fare calculation."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..geo.shapes import Coordinate
from .extras import ExtraCharge
from .models import Money


class PricingMethod(str, Enum):
    FIXED = "fixed"
    DISTANCE_BASED = "distance_based"


class PriceRequest(BaseModel):
    """Trip to price.

    Each endpoint is a (lon, lat) point or a known region id; the origin is
    required, the destination is optional. A naive ``booking_datetime`` is
    read as local time in the engine timezone.
    """

    model_config = ConfigDict(frozen=True)

    origin: Coordinate | None = None
    origin_region_id: str | None = None
    destination: Coordinate | None = None
    destination_region_id: str | None = None
    vehicle_id: str = Field(min_length=1)
    distance_km: Money | None = None
    duration_minutes: Money | None = None
    booking_datetime: datetime
    minutes_until_pickup: int | None = Field(default=None, ge=0)
    extras: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_origin(self) -> Self:
        if self.origin is None and self.origin_region_id is None:
            raise ValueError("Either origin or origin_region_id is required")
        return self


class SurchargeDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    surcharge_id: str
    name: str
    type: str
    application: str
    value: Decimal
    amount: Decimal
    reason: str


class PriceBreakdown(BaseModel):
    """Itemized fare. Amounts are rounded half-up to cents.

    Component fields that do not apply to the pricing method are None:
    ``fixed_fare`` and the waiting-time fields for distance-based fares,
    the per-km/per-minute components for fixed fares.
    """

    model_config = ConfigDict(frozen=True)

    method: PricingMethod
    vehicle_id: str
    currency: str
    origin_region_id: str
    destination_region_id: str | None = None
    price_id: str

    distance_km: Decimal | None = None
    duration_minutes: Decimal | None = None

    base_fare: Decimal | None = None
    distance_charge: Decimal | None = None
    time_charge: Decimal | None = None
    fare_before_minimum: Decimal | None = None
    minimum_fare: Decimal | None = None
    minimum_fare_applied: bool = False

    fixed_fare: Decimal | None = None
    included_waiting_time: int | None = None
    additional_waiting_price: Decimal | None = None

    extras: list[ExtraCharge] = Field(default_factory=list)
    extras_total: Decimal

    surcharges: list[SurchargeDetail] = Field(default_factory=list)
    total_surcharges: Decimal

    subtotal: Decimal
    total: Decimal
