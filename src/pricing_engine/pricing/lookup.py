"""Base and fixed price lookup against a price store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from .models import BasePrice, FixedPrice, VehicleFixedPricing, VehiclePricing, localize

if TYPE_CHECKING:
    from ..stores.protocols import PriceStore

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class BasePriceMatch:
    price: BasePrice
    vehicle_pricing: VehiclePricing


@dataclass(frozen=True)
class FixedPriceMatch:
    price: FixedPrice
    vehicle_pricing: VehicleFixedPricing


def _fixed_price_rank(match: FixedPriceMatch) -> tuple[int, datetime]:
    return (match.price.priority, match.price.created_at or _EPOCH)


async def find_fixed_price(
    store: PriceStore,
    origin_region_id: str,
    destination_region_id: str,
    vehicle_id: str,
    at: datetime,
    timezone: tzinfo = UTC,
) -> FixedPriceMatch | None:
    """Best fixed price for a route and vehicle at ``at``.

    Highest priority wins; equal priorities go to the most recently created
    record. A naive ``at`` is read in ``timezone``.
    """
    at = localize(at, timezone)
    candidates = []
    for price in await store.fixed_prices_for_route(origin_region_id, destination_region_id):
        if not price.is_active or not price.is_valid_at(at):
            continue
        vehicle_pricing = price.pricing_for(vehicle_id)
        if vehicle_pricing is not None:
            candidates.append(FixedPriceMatch(price, vehicle_pricing))

    if not candidates:
        logger.debug(
            f"No fixed price for {origin_region_id} -> {destination_region_id} ({vehicle_id})"
        )
        return None

    candidates.sort(key=_fixed_price_rank, reverse=True)
    return candidates[0]


async def find_base_price(
    store: PriceStore,
    region_id: str,
    vehicle_id: str,
    at: datetime,
    timezone: tzinfo = UTC,
) -> BasePriceMatch | None:
    """First active base price valid at ``at`` that prices the vehicle.

    A naive ``at`` is read in ``timezone``.
    """
    at = localize(at, timezone)
    for price in await store.base_prices_for_region(region_id):
        if not price.is_active or not price.is_valid_at(at):
            continue
        vehicle_pricing = price.pricing_for(vehicle_id)
        if vehicle_pricing is not None:
            return BasePriceMatch(price, vehicle_pricing)

    logger.debug(f"No base price for region {region_id} ({vehicle_id})")
    return None
