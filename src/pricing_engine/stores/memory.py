"""In-process stores backed by lists, kept in insertion order."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..geo.regions import PriceRegion, RegionLoader
from ..pricing.models import BasePrice, FixedPrice
from ..pricing.surcharges import (
    CutoffTimeSurcharge,
    DateTimeSurcharge,
    Surcharge,
    TimeLeftSurcharge,
)
from ..vehicles import Vehicle

logger = logging.getLogger(__name__)


class InMemoryRegionStore:
    def __init__(self, regions: Iterable[PriceRegion] = ()):
        self._regions: list[PriceRegion] = list(regions)

    @classmethod
    def from_loader(cls, loader: RegionLoader) -> "InMemoryRegionStore":
        return cls(loader.get_all_regions())

    def add(self, region: PriceRegion) -> None:
        self._regions.append(region)

    async def list_active_regions(self) -> list[PriceRegion]:
        return [region for region in self._regions if region.is_active]

    async def get_region(self, region_id: str) -> PriceRegion | None:
        return next((r for r in self._regions if r.id == region_id), None)


class InMemoryPriceStore:
    def __init__(
        self,
        base_prices: Iterable[BasePrice] = (),
        fixed_prices: Iterable[FixedPrice] = (),
    ):
        self._base_prices: list[BasePrice] = list(base_prices)
        self._fixed_prices: list[FixedPrice] = list(fixed_prices)

    def add_base_price(self, price: BasePrice) -> None:
        self._base_prices.append(price)

    def add_fixed_price(self, price: FixedPrice) -> None:
        self._fixed_prices.append(price)

    async def base_prices_for_region(self, region_id: str) -> list[BasePrice]:
        return [p for p in self._base_prices if p.region_id == region_id]

    async def fixed_prices_for_route(
        self, origin_region_id: str, destination_region_id: str
    ) -> list[FixedPrice]:
        return [
            p
            for p in self._fixed_prices
            if p.origin_region_id == origin_region_id
            and p.destination_region_id == destination_region_id
        ]


class InMemorySurchargeStore:
    def __init__(
        self,
        surcharges: Iterable[CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge] = (),
    ):
        self._surcharges = list(surcharges)

    def add(self, surcharge: CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge) -> None:
        self._surcharges.append(surcharge)

    async def surcharges_for_region(
        self, region_id: str
    ) -> list[CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge]:
        return [s for s in self._surcharges if s.region_id == region_id]


class InMemoryVehicleCatalog:
    def __init__(self, vehicles: Iterable[Vehicle] = ()):
        self._vehicles: dict[str, Vehicle] = {v.id: v for v in vehicles}

    def add(self, vehicle: Vehicle) -> None:
        self._vehicles[vehicle.id] = vehicle

    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        return self._vehicles.get(vehicle_id)

    async def list_vehicles(self) -> list[Vehicle]:
        return list(self._vehicles.values())


class PricingSnapshot(BaseModel):
    """Whole configuration snapshot as one JSON document.

    Regions use the same shape encoding as PriceRegion; surcharges are
    discriminated on ``type``.
    """

    model_config = ConfigDict(frozen=True)

    regions: list[PriceRegion] = Field(default_factory=list)
    base_prices: list[BasePrice] = Field(default_factory=list)
    fixed_prices: list[FixedPrice] = Field(default_factory=list)
    surcharges: list[Surcharge] = Field(default_factory=list)
    vehicles: list[Vehicle] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path | str) -> "PricingSnapshot":
        with open(path) as f:
            data: dict[str, Any] = json.load(f)
        snapshot = cls.model_validate(data)
        logger.info(
            f"Loaded pricing snapshot from {path}: {len(snapshot.regions)} regions, "
            f"{len(snapshot.base_prices)} base prices, {len(snapshot.fixed_prices)} fixed prices, "
            f"{len(snapshot.surcharges)} surcharges, {len(snapshot.vehicles)} vehicles"
        )
        return snapshot

    def region_store(self) -> InMemoryRegionStore:
        return InMemoryRegionStore(self.regions)

    def price_store(self) -> InMemoryPriceStore:
        return InMemoryPriceStore(self.base_prices, self.fixed_prices)

    def surcharge_store(self) -> InMemorySurchargeStore:
        return InMemorySurchargeStore(self.surcharges)

    def vehicle_catalog(self) -> InMemoryVehicleCatalog:
        return InMemoryVehicleCatalog(self.vehicles)
