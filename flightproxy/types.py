from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

PROVIDER_AMADEUS = "AMADEUS"


class SearchQuery(BaseModel):
    """Validated search request. Field names follow the public JSON body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: str = Field(alias="from", description="IATA code, e.g. 'JFK'")
    destination: str = Field(alias="to")
    start: str = Field(description="Departure date or datetime")
    end: Optional[str] = None  # return date, round trips only
    pax: Optional[int] = 1
    optimize: Optional[str] = "balanced"  # cheapest | shortest | balanced (anything else = balanced)


class Leg(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    depart: str       # upstream timestamp, passed through as-is
    arrive: str
    airline: str
    flight_no: str = Field(alias="flightNo")
    duration_min: int = Field(alias="durationMin", ge=0)


class FlightOption(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    provider: str
    price: float
    currency: str
    legs: Tuple[Leg, ...] = Field(min_length=1)
    total_duration_min: int = Field(alias="totalDurationMin", ge=0)
    transfers: int = Field(ge=0)
    notes: Tuple[str, ...] = ()

    def to_public(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
