"""Multi-vehicle quotes: price every vehicle that fits the party."""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core.exceptions import NoPriceConfiguredError, UnknownVehicleError
from .fare_logging import log_quote_context
from .geo.shapes import Coordinate
from .pricing.breakdown import PriceBreakdown, PriceRequest
from .pricing.calculator import PriceCalculator
from .pricing.models import Money
from .vehicles import Vehicle

if TYPE_CHECKING:
    from .stores.protocols import VehicleCatalog

logger = logging.getLogger(__name__)


class QuoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: Coordinate | None = None
    origin_region_id: str | None = None
    destination: Coordinate | None = None
    destination_region_id: str | None = None
    pickup_at: datetime
    passengers: int = Field(default=1, ge=1)
    luggage: int = Field(default=0, ge=0)
    extras: list[str] = Field(default_factory=list)
    distance_km: Money | None = None
    duration_minutes: Money | None = None
    preferred_vehicle_id: str | None = None

    @model_validator(mode="after")
    def require_origin(self) -> Self:
        if self.origin is None and self.origin_region_id is None:
            raise ValueError("Either origin or origin_region_id is required")
        return self


class VehicleQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    display_name: str
    category: str
    max_passengers: int
    max_luggage: int
    image_url: str | None = None
    breakdown: PriceBreakdown

    @property
    def total(self) -> Decimal:
        return self.breakdown.total


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    quote_id: str
    created_at: datetime
    expires_at: datetime
    options: list[VehicleQuote] = Field(default_factory=list)


def minutes_between(now: datetime, later: datetime) -> int:
    """Whole minutes from now until later, floored and never negative."""
    seconds = (later - now).total_seconds()
    return max(0, math.floor(seconds / 60))


class QuoteService:
    """Prices all fitting vehicles for a trip and sorts them by total."""

    def __init__(
        self,
        calculator: PriceCalculator,
        catalog: VehicleCatalog,
        quote_ttl_minutes: int = 60,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._calculator = calculator
        self._catalog = catalog
        self._ttl = timedelta(minutes=quote_ttl_minutes)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    async def quote(self, request: QuoteRequest) -> Quote:
        """Quote every active vehicle with room for the party.

        Raises:
            UnknownVehicleError: If the preferred vehicle is not in the catalog
            NoRegionCoverageError: If the origin is in no active region
            NoPriceConfiguredError: If vehicles fit but none could be priced
        """
        quote_id = self._id_factory()
        now = self._clock()

        with log_quote_context(quote_id):
            vehicles = await self._candidate_vehicles(request)
            logger.info(
                f"Quoting {len(vehicles)} vehicle(s) for {request.passengers} passenger(s), "
                f"{request.luggage} bag(s)"
            )

            pickup_at = self._calculator.localize(request.pickup_at)
            minutes_until_pickup = minutes_between(now, pickup_at)
            results = await asyncio.gather(
                *(self._price_vehicle(v, request, minutes_until_pickup) for v in vehicles),
                return_exceptions=True,
            )

            options = []
            last_missing_price: NoPriceConfiguredError | None = None
            for vehicle, result in zip(vehicles, results, strict=True):
                if isinstance(result, NoPriceConfiguredError):
                    logger.info(f"Skipping vehicle {vehicle.id}: {result.message}")
                    last_missing_price = result
                    continue
                if isinstance(result, BaseException):
                    raise result
                options.append(result)

            if vehicles and not options and last_missing_price is not None:
                raise last_missing_price

            options.sort(key=lambda option: option.total)
            return Quote(
                quote_id=quote_id,
                created_at=now,
                expires_at=now + self._ttl,
                options=options,
            )

    async def _candidate_vehicles(self, request: QuoteRequest) -> list[Vehicle]:
        if request.preferred_vehicle_id is not None:
            vehicle = await self._catalog.get_vehicle(request.preferred_vehicle_id)
            if vehicle is None:
                raise UnknownVehicleError(
                    f"Unknown vehicle: {request.preferred_vehicle_id}",
                    details={"vehicle_id": request.preferred_vehicle_id},
                )
            vehicles = [vehicle]
        else:
            vehicles = await self._catalog.list_vehicles()

        return [
            v for v in vehicles if v.is_active and v.fits(request.passengers, request.luggage)
        ]

    async def _price_vehicle(
        self, vehicle: Vehicle, request: QuoteRequest, minutes_until_pickup: int
    ) -> VehicleQuote:
        breakdown = await self._calculator.calculate(
            PriceRequest(
                origin=request.origin,
                origin_region_id=request.origin_region_id,
                destination=request.destination,
                destination_region_id=request.destination_region_id,
                vehicle_id=vehicle.id,
                distance_km=request.distance_km,
                duration_minutes=request.duration_minutes,
                booking_datetime=request.pickup_at,
                minutes_until_pickup=minutes_until_pickup,
                extras=request.extras,
            )
        )
        return VehicleQuote(
            vehicle_id=vehicle.id,
            display_name=vehicle.display_name,
            category=vehicle.category,
            max_passengers=vehicle.max_passengers,
            max_luggage=vehicle.max_luggage,
            image_url=vehicle.image_url,
            breakdown=breakdown,
        )
