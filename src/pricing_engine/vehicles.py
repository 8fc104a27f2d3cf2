from pydantic import BaseModel, ConfigDict, Field


class Vehicle(BaseModel):
    """Catalog entry: capacity plus display metadata."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    category: str = "standard"
    max_passengers: int = Field(ge=1)
    max_luggage: int = Field(default=0, ge=0)
    image_url: str | None = None
    is_active: bool = True

    def fits(self, passengers: int, luggage: int = 0) -> bool:
        return self.max_passengers >= passengers and self.max_luggage >= luggage
