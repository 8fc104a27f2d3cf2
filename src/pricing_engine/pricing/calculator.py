from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from ..core.exceptions import NoPriceConfiguredError, NoRegionCoverageError
from ..core.money import ZERO, percentage_of, round_money
from ..fare_logging import log_context
from ..geo.distance import estimate_trip
from ..geo.regions import PriceRegion
from ..geo.resolver import RegionResolver
from ..geo.shapes import Coordinate
from .breakdown import PriceBreakdown, PriceRequest, PricingMethod, SurchargeDetail
from .extras import ExtrasCatalog
from .lookup import BasePriceMatch, FixedPriceMatch, find_base_price, find_fixed_price
from .surcharge_evaluator import SurchargeEvaluator
from .surcharges import SurchargeApplication

if TYPE_CHECKING:
    from datetime import datetime

    from ..settings import Settings
    from ..stores.protocols import PriceStore, RegionStore, SurchargeStore

logger = logging.getLogger(__name__)


class PriceCalculator:
    """Prices one trip for one vehicle against a configuration snapshot.

    A fixed route price for any (origin, destination) region pair wins over
    the origin region's base price. Surcharges of the priced region are then
    added on top of the subtotal.
    """

    def __init__(
        self,
        region_resolver: RegionResolver,
        price_store: PriceStore,
        surcharge_evaluator: SurchargeEvaluator,
        extras_catalog: ExtrasCatalog | None = None,
        average_speed_kmh: float = 40.0,
    ):
        self._regions = region_resolver
        self._prices = price_store
        self._surcharges = surcharge_evaluator
        self._extras = extras_catalog or ExtrasCatalog()
        self._average_speed_kmh = average_speed_kmh

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        region_store: RegionStore,
        price_store: PriceStore,
        surcharge_store: SurchargeStore,
    ) -> PriceCalculator:
        return cls(
            region_resolver=RegionResolver(region_store),
            price_store=price_store,
            surcharge_evaluator=SurchargeEvaluator(surcharge_store, settings.pricing.tzinfo),
            extras_catalog=ExtrasCatalog.from_settings(settings.extras),
            average_speed_kmh=settings.pricing.average_speed_kmh,
        )

    def localize(self, moment: datetime) -> datetime:
        return self._surcharges.localize(moment)

    async def calculate(self, request: PriceRequest) -> PriceBreakdown:
        """Calculate the fare breakdown for a trip.

        Raises:
            NoRegionCoverageError: If the origin is in no active region or a
                region id is unknown
            NoPriceConfiguredError: If no fixed or base price covers the vehicle
        """
        at = self.localize(request.booking_datetime)

        with log_context(vehicle_id=request.vehicle_id):
            origin_regions, destination_regions = await asyncio.gather(
                self._resolve(request.origin, request.origin_region_id),
                self._resolve(request.destination, request.destination_region_id),
            )
            if not origin_regions:
                raise NoRegionCoverageError(
                    "Origin is not covered by any active price region",
                    details={"origin": request.origin},
                )

            fixed = await self._find_fixed(
                origin_regions, destination_regions, request.vehicle_id, at
            )
            if fixed is not None:
                (origin_region, destination_region), match = fixed
                with log_context(region_id=origin_region.id):
                    logger.info(f"Fixed price {match.price.id} applies")
                    return await self._price_fixed(
                        request, at, origin_region, destination_region, match
                    )

            origin_region = origin_regions[0]
            with log_context(region_id=origin_region.id):
                base = await find_base_price(
                    self._prices, origin_region.id, request.vehicle_id, at
                )
                if base is None:
                    raise NoPriceConfiguredError(
                        f"No price configured for vehicle {request.vehicle_id} "
                        f"in region {origin_region.id}",
                        details={"region_id": origin_region.id, "vehicle_id": request.vehicle_id},
                    )
                logger.info(f"Distance-based price {base.price.id} applies")
                destination_region = destination_regions[0] if destination_regions else None
                return await self._price_distance_based(
                    request, at, origin_region, destination_region, base
                )

    async def _resolve(
        self, point: Coordinate | None, region_id: str | None
    ) -> list[PriceRegion]:
        if region_id is not None:
            return [await self._regions.get_region(region_id)]
        if point is not None:
            lon, lat = point
            return await self._regions.regions_containing(lon, lat)
        return []

    async def _find_fixed(
        self,
        origin_regions: list[PriceRegion],
        destination_regions: list[PriceRegion],
        vehicle_id: str,
        at: datetime,
    ) -> tuple[tuple[PriceRegion, PriceRegion], FixedPriceMatch] | None:
        for origin_region in origin_regions:
            for destination_region in destination_regions:
                match = await find_fixed_price(
                    self._prices, origin_region.id, destination_region.id, vehicle_id, at
                )
                if match is not None:
                    return (origin_region, destination_region), match
        return None

    async def _price_fixed(
        self,
        request: PriceRequest,
        at: datetime,
        origin_region: PriceRegion,
        destination_region: PriceRegion,
        match: FixedPriceMatch,
    ) -> PriceBreakdown:
        extras, extras_total = self._extras.price(request.extras)
        fixed_fare = match.vehicle_pricing.fixed_price
        subtotal = fixed_fare + extras_total
        surcharges, total_surcharges = await self._apply_surcharges(
            origin_region.id, at, request.minutes_until_pickup, subtotal
        )
        additional_waiting = match.vehicle_pricing.additional_waiting_price

        return PriceBreakdown(
            method=PricingMethod.FIXED,
            vehicle_id=request.vehicle_id,
            currency=match.price.currency,
            origin_region_id=origin_region.id,
            destination_region_id=destination_region.id,
            price_id=match.price.id,
            distance_km=(
                request.distance_km
                if request.distance_km is not None
                else match.price.estimated_distance_km
            ),
            duration_minutes=(
                request.duration_minutes
                if request.duration_minutes is not None
                else match.price.estimated_duration_minutes
            ),
            fixed_fare=round_money(fixed_fare),
            included_waiting_time=match.vehicle_pricing.included_waiting_time,
            additional_waiting_price=(
                round_money(additional_waiting) if additional_waiting is not None else None
            ),
            extras=extras,
            extras_total=round_money(extras_total),
            surcharges=surcharges,
            total_surcharges=round_money(total_surcharges),
            subtotal=round_money(subtotal),
            total=round_money(subtotal + total_surcharges),
        )

    async def _price_distance_based(
        self,
        request: PriceRequest,
        at: datetime,
        origin_region: PriceRegion,
        destination_region: PriceRegion | None,
        match: BasePriceMatch,
    ) -> PriceBreakdown:
        distance_km, duration_minutes = self._trip_metrics(request)
        pricing = match.vehicle_pricing

        extras, extras_total = self._extras.price(request.extras)
        distance_charge = distance_km * pricing.price_per_km
        time_charge = duration_minutes * pricing.price_per_minute
        fare_before_minimum = pricing.base_fare + distance_charge + time_charge + extras_total
        minimum_with_extras = pricing.minimum_fare + extras_total
        minimum_fare_applied = minimum_with_extras > fare_before_minimum
        subtotal = max(fare_before_minimum, minimum_with_extras)

        surcharges, total_surcharges = await self._apply_surcharges(
            origin_region.id, at, request.minutes_until_pickup, subtotal
        )

        return PriceBreakdown(
            method=PricingMethod.DISTANCE_BASED,
            vehicle_id=request.vehicle_id,
            currency=match.price.currency,
            origin_region_id=origin_region.id,
            destination_region_id=destination_region.id if destination_region else None,
            price_id=match.price.id,
            distance_km=distance_km,
            duration_minutes=duration_minutes,
            base_fare=round_money(pricing.base_fare),
            distance_charge=round_money(distance_charge),
            time_charge=round_money(time_charge),
            fare_before_minimum=round_money(fare_before_minimum),
            minimum_fare=round_money(pricing.minimum_fare),
            minimum_fare_applied=minimum_fare_applied,
            extras=extras,
            extras_total=round_money(extras_total),
            surcharges=surcharges,
            total_surcharges=round_money(total_surcharges),
            subtotal=round_money(subtotal),
            total=round_money(subtotal + total_surcharges),
        )

    def _trip_metrics(self, request: PriceRequest) -> tuple[Decimal, Decimal]:
        """Supplied distance/duration, else the straight-line estimate, else zero."""
        distance_km = request.distance_km
        duration_minutes = request.duration_minutes
        if distance_km is not None and duration_minutes is not None:
            return distance_km, duration_minutes

        if request.origin is not None and request.destination is not None:
            estimate = estimate_trip(request.origin, request.destination, self._average_speed_kmh)
            logger.debug(
                f"Estimated trip: {estimate.distance_km} km, {estimate.duration_minutes} min"
            )
            if distance_km is None:
                distance_km = estimate.distance_km
            if duration_minutes is None:
                duration_minutes = estimate.duration_minutes

        return (
            distance_km if distance_km is not None else ZERO,
            duration_minutes if duration_minutes is not None else ZERO,
        )

    async def _apply_surcharges(
        self,
        region_id: str,
        at: datetime,
        minutes_until_pickup: int | None,
        subtotal: Decimal,
    ) -> tuple[list[SurchargeDetail], Decimal]:
        """Every applicable surcharge is computed against the same subtotal."""
        details = []
        for item in await self._surcharges.evaluate(region_id, at, minutes_until_pickup):
            surcharge = item.surcharge
            if surcharge.application == SurchargeApplication.PERCENTAGE:
                amount = round_money(percentage_of(subtotal, surcharge.value))
            else:
                amount = round_money(surcharge.value)
            details.append(
                SurchargeDetail(
                    surcharge_id=surcharge.id,
                    name=surcharge.name,
                    type=surcharge.type,
                    application=surcharge.application.value,
                    value=surcharge.value,
                    amount=amount,
                    reason=item.reason,
                )
            )
        return details, sum((d.amount for d in details), ZERO)
