"""Surcharge definitions.

A surcharge is a tagged union on ``type``; each variant carries only the
fields its trigger needs. Construction and updates raise
InvalidSurchargeDefinitionError when a variant's required field is missing,
when a datetime surcharge sets neither or both ranges, or when a fixed-amount
surcharge has no currency.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from ..core.exceptions import InvalidSurchargeDefinitionError
from .models import Currency, Money, UTCDatetime, ValidityWindow

HHMM_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"


class SurchargeType(str, Enum):
    CUTOFF_TIME = "cutoff_time"
    TIME_LEFT = "time_left"
    DATETIME = "datetime"


class SurchargeApplication(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


def minutes_of_day(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


class TimeRange(BaseModel):
    """Recurring daily window in local clock time. Wraps midnight when start > end."""

    model_config = ConfigDict(frozen=True)

    start_time: str = Field(pattern=HHMM_PATTERN, examples=["22:00"])
    end_time: str = Field(pattern=HHMM_PATTERN, examples=["06:00"])

    @property
    def wraps_midnight(self) -> bool:
        return minutes_of_day(self.start_time) > minutes_of_day(self.end_time)

    def contains(self, minute_of_day: int) -> bool:
        start = minutes_of_day(self.start_time)
        end = minutes_of_day(self.end_time)
        if start > end:
            return minute_of_day >= start or minute_of_day <= end
        return start <= minute_of_day <= end


class DateTimeRange(BaseModel):
    """One-off absolute window, both ends inclusive."""

    model_config = ConfigDict(frozen=True)

    start: UTCDatetime
    end: UTCDatetime

    @model_validator(mode="after")
    def check_order(self) -> Self:
        if self.end < self.start:
            raise InvalidSurchargeDefinitionError(
                "Date time range end must not precede its start",
                details={"start": self.start.isoformat(), "end": self.end.isoformat()},
            )
        return self


def _require(data: Any, field: str, surcharge_type: SurchargeType, label: str) -> None:
    if isinstance(data, dict) and data.get(field) is None:
        raise InvalidSurchargeDefinitionError(
            f"{label} is required for {surcharge_type.value} surcharges",
            details={"field": field, "type": surcharge_type.value},
        )


class SurchargeBase(ValidityWindow):
    id: str
    region_id: str
    name: str
    application: SurchargeApplication
    value: Money
    currency: Currency | None = None
    priority: int = 0
    is_active: bool = True
    description: str | None = None
    created_at: UTCDatetime | None = None

    @model_validator(mode="after")
    def check_currency(self) -> Self:
        if self.application == SurchargeApplication.FIXED_AMOUNT and not self.currency:
            raise InvalidSurchargeDefinitionError(
                "Currency is required for fixed amount surcharges",
                details={"field": "currency", "surcharge_id": self.id},
            )
        return self


class CutoffTimeSurcharge(SurchargeBase):
    """Late booking: applies when pickup is at most cutoff_minutes away."""

    type: Literal["cutoff_time"] = "cutoff_time"
    cutoff_minutes: int = Field(ge=0)

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        _require(data, "cutoff_minutes", SurchargeType.CUTOFF_TIME, "Cutoff minutes")
        return data


class TimeLeftSurcharge(SurchargeBase):
    """Short notice: applies when pickup is at most time_left_minutes away."""

    type: Literal["time_left"] = "time_left"
    time_left_minutes: int = Field(ge=0)

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        _require(data, "time_left_minutes", SurchargeType.TIME_LEFT, "Time left minutes")
        return data


class DateTimeSurcharge(SurchargeBase):
    """Night, rush-hour or event surcharge, recurring daily or one-off."""

    type: Literal["datetime"] = "datetime"
    time_range: TimeRange | None = None
    date_time_range: DateTimeRange | None = None
    days_of_week: list[Annotated[int, Field(ge=0, le=6)]] | None = Field(
        default=None, description="0 = Sunday ... 6 = Saturday"
    )

    @model_validator(mode="before")
    @classmethod
    def check_ranges(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        has_time_range = data.get("time_range") is not None
        has_date_time_range = data.get("date_time_range") is not None
        if not has_time_range and not has_date_time_range:
            raise InvalidSurchargeDefinitionError(
                "Either time range or date time range is required for datetime surcharges",
                details={"type": SurchargeType.DATETIME.value},
            )
        if has_time_range and has_date_time_range:
            raise InvalidSurchargeDefinitionError(
                "Cannot specify both time range and date time range",
                details={"type": SurchargeType.DATETIME.value},
            )
        return data


Surcharge = Annotated[
    CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge,
    Field(discriminator="type"),
]

_surcharge_adapter: TypeAdapter[Surcharge] = TypeAdapter(Surcharge)


def parse_surcharge(data: dict[str, Any]) -> CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge:
    """Build a surcharge of whichever variant ``data["type"]`` names."""
    return _surcharge_adapter.validate_python(data)


def update_surcharge(
    surcharge: CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge,
    **changes: Any,
) -> CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge:
    """Merge changes over an existing surcharge and validate the result as a whole.

    Changing ``type`` re-dispatches to the new variant, so the new type's
    required fields must be present in ``changes``.
    """
    merged = {**surcharge.model_dump(), **changes}
    return parse_surcharge(merged)
