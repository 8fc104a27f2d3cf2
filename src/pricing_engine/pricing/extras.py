from collections.abc import Iterable, Mapping
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from ..core.money import ZERO, to_decimal
from ..settings import DEFAULT_EXTRA_PRICES, ExtrasSettings


class ExtraCharge(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    price: Decimal


class ExtrasCatalog:
    """Fixed price table for add-on services.

    Codes are matched case-insensitively. Unknown codes are charged zero
    rather than rejected; a code listed twice is charged twice.
    """

    def __init__(self, prices: Mapping[str, Decimal | float | int | str] | None = None):
        source = DEFAULT_EXTRA_PRICES if prices is None else prices
        self._prices: dict[str, Decimal] = {
            self.normalize(code): to_decimal(price) for code, price in source.items()
        }

    @classmethod
    def from_settings(cls, settings: ExtrasSettings) -> "ExtrasCatalog":
        return cls(settings.prices)

    @staticmethod
    def normalize(code: str) -> str:
        return code.strip().lower()

    @property
    def codes(self) -> list[str]:
        return sorted(self._prices)

    def price_of(self, code: str) -> Decimal:
        return self._prices.get(self.normalize(code), ZERO)

    def price(self, codes: Iterable[str]) -> tuple[list[ExtraCharge], Decimal]:
        """Itemize the requested extras. Returns (lines, total)."""
        lines = [
            ExtraCharge(code=self.normalize(code), price=self.price_of(code)) for code in codes
        ]
        total = sum((line.price for line in lines), ZERO)
        return lines, total
