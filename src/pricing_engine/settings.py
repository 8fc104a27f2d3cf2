from decimal import Decimal
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXTRA_PRICES: dict[str, Decimal] = {
    "child_seat": Decimal("10.00"),
    "baby_seat": Decimal("12.00"),
    "meet_and_greet": Decimal("15.00"),
}


class PricingSettings(BaseSettings):
    timezone: str = Field(
        default="UTC",
        description="IANA timezone used to read local clock time for recurring surcharges",
    )
    average_speed_kmh: float = Field(
        default=40.0,
        gt=0.0,
        le=200.0,
        description="Speed used to approximate duration from straight-line distance",
    )
    quote_ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class ExtrasSettings(BaseSettings):
    prices: dict[str, Decimal] = Field(default_factory=lambda: dict(DEFAULT_EXTRA_PRICES))

    model_config = SettingsConfigDict(env_prefix="EXTRAS_")

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        negative = [code for code, price in v.items() if price < 0]
        if negative:
            raise ValueError(f"Extra prices must be non-negative: {', '.join(sorted(negative))}")
        return v


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["text", "json"] = "text"
    environment: str = "development"
    # Decimal places kept when pickup and dropoff coordinates appear in logs
    coordinate_decimals: int = Field(default=2, ge=0, le=6)

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    extras: ExtrasSettings = Field(default_factory=ExtrasSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
