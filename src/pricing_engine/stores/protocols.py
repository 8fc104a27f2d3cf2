"""Read-only contracts for the configuration the engine prices against.

Persistence lives elsewhere; any object with these async methods can back
the engine. See ``stores.memory`` for the in-process implementations.
"""

from typing import Protocol

from ..geo.regions import PriceRegion
from ..pricing.models import BasePrice, FixedPrice
from ..pricing.surcharges import CutoffTimeSurcharge, DateTimeSurcharge, TimeLeftSurcharge
from ..vehicles import Vehicle


class RegionStore(Protocol):
    async def list_active_regions(self) -> list[PriceRegion]: ...

    async def get_region(self, region_id: str) -> PriceRegion | None: ...


class PriceStore(Protocol):
    async def base_prices_for_region(self, region_id: str) -> list[BasePrice]: ...

    async def fixed_prices_for_route(
        self, origin_region_id: str, destination_region_id: str
    ) -> list[FixedPrice]: ...


class SurchargeStore(Protocol):
    async def surcharges_for_region(
        self, region_id: str
    ) -> list[CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge]: ...


class VehicleCatalog(Protocol):
    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None: ...

    async def list_vehicles(self) -> list[Vehicle]: ...
