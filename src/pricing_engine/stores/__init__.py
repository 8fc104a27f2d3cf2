from .memory import (
    InMemoryPriceStore,
    InMemoryRegionStore,
    InMemorySurchargeStore,
    InMemoryVehicleCatalog,
    PricingSnapshot,
)
from .protocols import PriceStore, RegionStore, SurchargeStore, VehicleCatalog

__all__ = [
    "InMemoryPriceStore",
    "InMemoryRegionStore",
    "InMemorySurchargeStore",
    "InMemoryVehicleCatalog",
    "PriceStore",
    "PricingSnapshot",
    "RegionStore",
    "SurchargeStore",
    "VehicleCatalog",
]
