"""Tests for surcharge definitions and their write-time validation."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pricing_engine.core.exceptions import InvalidSurchargeDefinitionError
from pricing_engine.pricing.surcharges import (
    CutoffTimeSurcharge,
    DateTimeSurcharge,
    SurchargeApplication,
    SurchargeType,
    TimeLeftSurcharge,
    TimeRange,
    parse_surcharge,
    update_surcharge,
)

COMMON = {
    "id": "sc-1",
    "region_id": "dxb",
    "name": "Late booking",
    "application": "percentage",
    "value": 25,
}


@pytest.mark.unit
class TestParseSurcharge:
    def test_cutoff_time(self):
        surcharge = parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 120})
        assert isinstance(surcharge, CutoffTimeSurcharge)
        assert surcharge.type == SurchargeType.CUTOFF_TIME
        assert surcharge.value == Decimal("25")

    def test_time_left(self):
        surcharge = parse_surcharge({**COMMON, "type": "time_left", "time_left_minutes": 30})
        assert isinstance(surcharge, TimeLeftSurcharge)

    def test_datetime_with_time_range(self):
        surcharge = parse_surcharge(
            {
                **COMMON,
                "type": "datetime",
                "time_range": {"start_time": "22:00", "end_time": "06:00"},
                "days_of_week": [5, 6],
            }
        )
        assert isinstance(surcharge, DateTimeSurcharge)
        assert surcharge.time_range.wraps_midnight
        assert surcharge.days_of_week == [5, 6]

    def test_datetime_with_date_time_range(self):
        surcharge = parse_surcharge(
            {
                **COMMON,
                "type": "datetime",
                "date_time_range": {
                    "start": "2024-12-31T20:00:00",
                    "end": "2025-01-01T04:00:00",
                },
            }
        )
        assert surcharge.date_time_range.start == datetime(2024, 12, 31, 20, tzinfo=UTC)

    def test_unknown_type_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_surcharge({**COMMON, "type": "weather"})

    def test_float_value_is_exact_decimal(self):
        surcharge = parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 60, "value": 12.5})
        assert surcharge.value == Decimal("12.5")


@pytest.mark.unit
class TestSurchargeValidation:
    def test_cutoff_requires_minutes(self):
        with pytest.raises(InvalidSurchargeDefinitionError, match="Cutoff minutes"):
            parse_surcharge({**COMMON, "type": "cutoff_time"})

    def test_time_left_requires_minutes(self):
        with pytest.raises(InvalidSurchargeDefinitionError, match="Time left minutes"):
            TimeLeftSurcharge(**COMMON)

    def test_datetime_requires_a_range(self):
        with pytest.raises(InvalidSurchargeDefinitionError, match="Either time range"):
            parse_surcharge({**COMMON, "type": "datetime"})

    def test_datetime_rejects_both_ranges(self):
        with pytest.raises(InvalidSurchargeDefinitionError, match="both"):
            parse_surcharge(
                {
                    **COMMON,
                    "type": "datetime",
                    "time_range": {"start_time": "22:00", "end_time": "06:00"},
                    "date_time_range": {
                        "start": "2024-12-31T20:00:00Z",
                        "end": "2025-01-01T04:00:00Z",
                    },
                }
            )

    def test_fixed_amount_requires_currency(self):
        with pytest.raises(InvalidSurchargeDefinitionError, match="Currency"):
            parse_surcharge(
                {**COMMON, "type": "cutoff_time", "cutoff_minutes": 60, "application": "fixed_amount"}
            )

    def test_fixed_amount_with_currency(self):
        surcharge = parse_surcharge(
            {
                **COMMON,
                "type": "cutoff_time",
                "cutoff_minutes": 60,
                "application": "fixed_amount",
                "currency": "aed",
            }
        )
        assert surcharge.application == SurchargeApplication.FIXED_AMOUNT
        assert surcharge.currency == "AED"

    def test_negative_value_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 60, "value": -1})

    def test_bad_clock_time_is_validation_error(self):
        with pytest.raises(ValidationError):
            TimeRange(start_time="24:00", end_time="06:00")

    def test_day_of_week_out_of_range(self):
        with pytest.raises(ValidationError):
            parse_surcharge(
                {
                    **COMMON,
                    "type": "datetime",
                    "time_range": {"start_time": "07:00", "end_time": "09:00"},
                    "days_of_week": [7],
                }
            )

    def test_date_time_range_end_before_start(self):
        with pytest.raises(InvalidSurchargeDefinitionError):
            parse_surcharge(
                {
                    **COMMON,
                    "type": "datetime",
                    "date_time_range": {
                        "start": "2025-01-02T00:00:00Z",
                        "end": "2025-01-01T00:00:00Z",
                    },
                }
            )


@pytest.mark.unit
class TestUpdateSurcharge:
    def test_update_merges_with_existing_record(self):
        surcharge = parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 120})

        updated = update_surcharge(surcharge, value=Decimal("30"))

        assert updated.value == Decimal("30")
        assert updated.cutoff_minutes == 120
        assert surcharge.value == Decimal("25")

    def test_update_clearing_required_field_rejected(self):
        surcharge = parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 120})
        with pytest.raises(InvalidSurchargeDefinitionError):
            update_surcharge(surcharge, cutoff_minutes=None)

    def test_update_adding_second_range_rejected(self):
        surcharge = parse_surcharge(
            {
                **COMMON,
                "type": "datetime",
                "time_range": {"start_time": "22:00", "end_time": "06:00"},
            }
        )
        with pytest.raises(InvalidSurchargeDefinitionError):
            update_surcharge(
                surcharge,
                date_time_range={"start": "2025-01-01T00:00:00Z", "end": "2025-01-02T00:00:00Z"},
            )

    def test_switching_to_fixed_amount_needs_currency(self):
        surcharge = parse_surcharge({**COMMON, "type": "time_left", "time_left_minutes": 30})
        with pytest.raises(InvalidSurchargeDefinitionError):
            update_surcharge(surcharge, application="fixed_amount")

    def test_changing_type_redispatches(self):
        surcharge = parse_surcharge({**COMMON, "type": "cutoff_time", "cutoff_minutes": 120})

        updated = update_surcharge(surcharge, type="time_left", time_left_minutes=45)

        assert isinstance(updated, TimeLeftSurcharge)
        assert updated.time_left_minutes == 45


@pytest.mark.unit
class TestTimeRange:
    def test_plain_range_inclusive(self):
        rush_hour = TimeRange(start_time="07:00", end_time="09:00")
        assert rush_hour.contains(7 * 60)
        assert rush_hour.contains(9 * 60)
        assert not rush_hour.contains(9 * 60 + 1)

    def test_wrapping_range(self):
        night = TimeRange(start_time="22:00", end_time="06:00")
        assert night.contains(23 * 60)
        assert night.contains(5 * 60)
        assert night.contains(0)
        assert not night.contains(12 * 60)

    def test_single_digit_hour_accepted(self):
        assert TimeRange(start_time="7:30", end_time="9:00").contains(8 * 60)
