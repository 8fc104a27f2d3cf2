"""Test factories for pricing configuration with deterministic Faker."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from faker import Faker
from faker.providers import BaseProvider

from pricing_engine.geo.regions import PriceRegion
from pricing_engine.geo.shapes import CircleShape, PolygonShape
from pricing_engine.pricing.models import (
    BasePrice,
    FixedPrice,
    VehicleFixedPricing,
    VehiclePricing,
)
from pricing_engine.pricing.surcharges import (
    CutoffTimeSurcharge,
    DateTimeSurcharge,
    TimeLeftSurcharge,
)
from pricing_engine.vehicles import Vehicle

if TYPE_CHECKING:
    from faker.proxy import Faker as FakerType

# Dubai International Airport and a square over Downtown Dubai
AIRPORT_CENTER = (55.3644, 25.2532)
DOWNTOWN_RING = [
    (55.26, 25.18),
    (55.30, 25.18),
    (55.30, 25.22),
    (55.26, 25.22),
    (55.26, 25.18),
]
DOWNTOWN_POINT = (55.28, 25.20)


class AirportTransferProvider(BaseProvider):
    """Vehicle names and surcharge labels for airport-transfer fixtures."""

    vehicle_models = (
        "Toyota Camry",
        "Lexus ES",
        "Mercedes V-Class",
        "GMC Yukon",
        "Hyundai H1",
    )
    surcharge_labels = ("Night", "Late booking", "Rush hour", "Holiday", "Event")

    def vehicle_model_name(self) -> str:
        return self.random_element(self.vehicle_models)

    def surcharge_label(self) -> str:
        return self.random_element(self.surcharge_labels)


def create_faker_instance(seed: int | None = None) -> FakerType:
    fake = Faker()
    fake.add_provider(AirportTransferProvider)
    if seed is not None:
        fake.seed_instance(seed)
    return fake


class PricingFactory:
    """Factory for pricing configuration records with Faker-generated metadata."""

    DEFAULT_SEED = 42
    CREATED_AT = datetime(2024, 1, 1, tzinfo=UTC)

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = seed
        self.fake = create_faker_instance(seed)

    def _id(self, prefix: str) -> str:
        return f"{prefix}-{self.fake.unique.bothify('????-####').lower()}"

    def airport_region(self, **overrides: Any) -> PriceRegion:
        defaults: dict[str, Any] = {
            "id": "dxb",
            "name": "Dubai International Airport",
            "tags": frozenset({"airport"}),
            "shape": CircleShape(center=AIRPORT_CENTER, radius_meters=3000),
        }
        defaults.update(overrides)
        return PriceRegion(**defaults)

    def downtown_region(self, **overrides: Any) -> PriceRegion:
        defaults: dict[str, Any] = {
            "id": "downtown",
            "name": "Downtown",
            "tags": frozenset({"city"}),
            "shape": PolygonShape(rings=[DOWNTOWN_RING]),
        }
        defaults.update(overrides)
        return PriceRegion(**defaults)

    def vehicle(self, **overrides: Any) -> Vehicle:
        defaults: dict[str, Any] = {
            "id": "sedan",
            "display_name": self.fake.vehicle_model_name(),
            "category": "standard",
            "max_passengers": 3,
            "max_luggage": 2,
            "image_url": self.fake.image_url(),
        }
        defaults.update(overrides)
        return Vehicle(**defaults)

    def vehicle_pricing(self, **overrides: Any) -> VehiclePricing:
        defaults: dict[str, Any] = {
            "vehicle_id": "sedan",
            "base_fare": Decimal("20"),
            "price_per_km": Decimal("2.5"),
            "price_per_minute": Decimal("0.8"),
            "minimum_fare": Decimal("25"),
        }
        defaults.update(overrides)
        return VehiclePricing(**defaults)

    def base_price(self, **overrides: Any) -> BasePrice:
        defaults: dict[str, Any] = {
            "id": self._id("bp"),
            "region_id": "dxb",
            "currency": "AED",
            "vehicle_prices": [self.vehicle_pricing()],
            "created_at": self.CREATED_AT,
        }
        defaults.update(overrides)
        return BasePrice(**defaults)

    def fixed_price(self, **overrides: Any) -> FixedPrice:
        defaults: dict[str, Any] = {
            "id": self._id("fp"),
            "origin_region_id": "dxb",
            "destination_region_id": "downtown",
            "name": "Airport to Downtown",
            "currency": "AED",
            "vehicle_prices": [
                VehicleFixedPricing(vehicle_id="sedan", fixed_price=Decimal("90"))
            ],
            "created_at": self.CREATED_AT,
        }
        defaults.update(overrides)
        return FixedPrice(**defaults)

    def _surcharge_defaults(self) -> dict[str, Any]:
        return {
            "id": self._id("sc"),
            "region_id": "dxb",
            "name": self.fake.surcharge_label(),
            "application": "percentage",
            "value": Decimal("25"),
            "created_at": self.CREATED_AT,
        }

    def cutoff_surcharge(self, **overrides: Any) -> CutoffTimeSurcharge:
        defaults = {**self._surcharge_defaults(), "cutoff_minutes": 120}
        defaults.update(overrides)
        return CutoffTimeSurcharge(**defaults)

    def time_left_surcharge(self, **overrides: Any) -> TimeLeftSurcharge:
        defaults = {**self._surcharge_defaults(), "time_left_minutes": 30}
        defaults.update(overrides)
        return TimeLeftSurcharge(**defaults)

    def night_surcharge(self, **overrides: Any) -> DateTimeSurcharge:
        defaults = {
            **self._surcharge_defaults(),
            "name": "Night",
            "time_range": {"start_time": "22:00", "end_time": "06:00"},
        }
        defaults.update(overrides)
        return DateTimeSurcharge(**defaults)
