"""Typed views of the Amadeus Flight Offers Search v2 payload.

Only the fields the proxy reads are declared; everything else is ignored.
Decoding failures are reported with the offending field path so a malformed
upstream answer surfaces as a readable ``UpstreamError``.
"""

import json
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from flightproxy.errors import UpstreamError


class _Upstream(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SegmentEndpoint(_Upstream):
    iata_code: str = Field(alias="iataCode")
    at: str


class Segment(_Upstream):
    departure: SegmentEndpoint
    arrival: SegmentEndpoint
    carrier_code: str = Field(alias="carrierCode")
    number: Union[str, int]
    duration: Optional[str] = None  # 'PT2H10M'


class Itinerary(_Upstream):
    duration: Optional[str] = None
    segments: List[Segment] = Field(min_length=1)


class Price(_Upstream):
    total: float = Field(allow_inf_nan=False)  # sent as a string, e.g. "150.00"
    currency: str


class Offer(_Upstream):
    id: Optional[Union[str, int]] = None
    price: Price
    itineraries: List[Itinerary] = Field(min_length=1)


def decode_offer(raw: Any, index: int) -> Offer:
    try:
        return Offer.model_validate(raw)
    except PydanticValidationError as e:
        problems = []
        for err in e.errors():
            path = "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in err["loc"])
            problems.append(f"data[{index}]{path}: {err['msg']}")
        raise UpstreamError("Malformed Amadeus offer: " + "; ".join(problems)) from e


def error_message(entry: Any) -> str:
    """Human-readable text for one entry of an Amadeus ``errors`` list."""
    if isinstance(entry, dict):
        text = entry.get("detail") or entry.get("title")
        if text:
            return str(text)
    return json.dumps(entry, default=str)
