from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from pricing_engine.fare_logging import LogContext
from pricing_engine.geo.resolver import RegionResolver
from pricing_engine.pricing.calculator import PriceCalculator
from pricing_engine.pricing.extras import ExtrasCatalog
from pricing_engine.pricing.surcharge_evaluator import SurchargeEvaluator
from pricing_engine.stores.memory import (
    InMemoryPriceStore,
    InMemoryRegionStore,
    InMemorySurchargeStore,
    InMemoryVehicleCatalog,
)
from tests.factories import PricingFactory, create_faker_instance

if TYPE_CHECKING:
    from faker.proxy import Faker


@pytest.fixture
def fake() -> "Faker":
    """Seeded Faker instance for deterministic test data."""
    return create_faker_instance(seed=42)


@pytest.fixture
def factory() -> PricingFactory:
    """Factory for pricing records with seeded Faker."""
    return PricingFactory(seed=42)


@pytest.fixture
def sample_regions_path() -> Path:
    """Path to the sample regions fixture file."""
    return Path(__file__).parent / "fixtures" / "sample_regions.geojson"


@pytest.fixture(autouse=True)
def clear_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def region_store(factory: PricingFactory) -> InMemoryRegionStore:
    """Airport circle and downtown polygon."""
    return InMemoryRegionStore([factory.airport_region(), factory.downtown_region()])


@pytest.fixture
def price_store() -> InMemoryPriceStore:
    return InMemoryPriceStore()


@pytest.fixture
def surcharge_store() -> InMemorySurchargeStore:
    return InMemorySurchargeStore()


@pytest.fixture
def vehicle_catalog(factory: PricingFactory) -> InMemoryVehicleCatalog:
    return InMemoryVehicleCatalog(
        [
            factory.vehicle(id="sedan", max_passengers=3, max_luggage=2),
            factory.vehicle(id="suv", category="premium", max_passengers=6, max_luggage=5),
            factory.vehicle(id="van", category="group", max_passengers=10, max_luggage=10),
        ]
    )


@pytest.fixture
def calculator(
    region_store: InMemoryRegionStore,
    price_store: InMemoryPriceStore,
    surcharge_store: InMemorySurchargeStore,
) -> PriceCalculator:
    """Calculator over the in-memory stores, UTC engine timezone."""
    return PriceCalculator(
        region_resolver=RegionResolver(region_store),
        price_store=price_store,
        surcharge_evaluator=SurchargeEvaluator(surcharge_store),
        extras_catalog=ExtrasCatalog(),
    )
