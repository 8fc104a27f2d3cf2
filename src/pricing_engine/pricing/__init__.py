from .breakdown import PriceBreakdown, PriceRequest, PricingMethod, SurchargeDetail
from .calculator import PriceCalculator
from .extras import ExtraCharge, ExtrasCatalog
from .lookup import BasePriceMatch, FixedPriceMatch, find_base_price, find_fixed_price
from .models import BasePrice, FixedPrice, VehicleFixedPricing, VehiclePricing
from .surcharge_evaluator import ApplicableSurcharge, SurchargeEvaluator
from .surcharges import (
    CutoffTimeSurcharge,
    DateTimeRange,
    DateTimeSurcharge,
    Surcharge,
    SurchargeApplication,
    SurchargeType,
    TimeLeftSurcharge,
    TimeRange,
    parse_surcharge,
    update_surcharge,
)

__all__ = [
    "ApplicableSurcharge",
    "BasePrice",
    "BasePriceMatch",
    "CutoffTimeSurcharge",
    "DateTimeRange",
    "DateTimeSurcharge",
    "ExtraCharge",
    "ExtrasCatalog",
    "FixedPrice",
    "FixedPriceMatch",
    "PriceBreakdown",
    "PriceCalculator",
    "PriceRequest",
    "PricingMethod",
    "Surcharge",
    "SurchargeApplication",
    "SurchargeDetail",
    "SurchargeEvaluator",
    "SurchargeType",
    "TimeLeftSurcharge",
    "TimeRange",
    "VehicleFixedPricing",
    "VehiclePricing",
    "find_base_price",
    "find_fixed_price",
    "parse_surcharge",
    "update_surcharge",
]
