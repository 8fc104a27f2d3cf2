from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.exceptions import NoRegionCoverageError
from .regions import PriceRegion

if TYPE_CHECKING:
    from ..stores.protocols import RegionStore

logger = logging.getLogger(__name__)


class RegionResolver:
    """Maps points and region ids to price regions.

    Every active region is tested in store order; there is no tie-break when
    several regions contain the same point.
    """

    def __init__(self, store: RegionStore):
        self._store = store

    async def regions_containing(self, lon: float, lat: float) -> list[PriceRegion]:
        matches = []
        for region in await self._store.list_active_regions():
            if not region.is_active:
                continue
            shape = getattr(region, "shape", None)
            if shape is None or not shape.is_usable():
                logger.warning(f"Skipping region {region.id}: no usable shape")
                continue
            if shape.contains(lon, lat):
                matches.append(region)

        logger.debug(
            f"Point ({lon}, {lat}) resolved to regions {[r.id for r in matches]}"
        )
        return matches

    async def get_region(self, region_id: str) -> PriceRegion:
        """Direct lookup; inactive regions are returned as-is.

        Raises:
            NoRegionCoverageError: If no region has this id
        """
        region = await self._store.get_region(region_id)
        if region is None:
            raise NoRegionCoverageError(
                f"Unknown price region: {region_id}",
                details={"region_id": region_id},
            )
        return region
