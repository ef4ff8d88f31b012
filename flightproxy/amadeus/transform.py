import re
from typing import Any, List

from flightproxy.amadeus.schema import Offer, Segment, decode_offer
from flightproxy.types import FlightOption, Leg, PROVIDER_AMADEUS

ID_PREFIX = "am"

# 'PT2H30M', 'PT45M', 'PT3H'; day and second components are not supported
_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")


def parse_duration(iso: Any) -> int:
    """Minutes in an ISO-8601 'PT#H#M' duration; 0 when it can't be read."""
    m = _DURATION_RE.search(str(iso))
    if not m:
        return 0
    h = int(m.group(1)) if m.group(1) else 0
    mins = int(m.group(2)) if m.group(2) else 0
    return h * 60 + mins


def segment_to_leg(seg: Segment) -> Leg:
    return Leg(
        origin=seg.departure.iata_code,
        destination=seg.arrival.iata_code,
        depart=seg.departure.at,
        arrive=seg.arrival.at,
        airline=seg.carrier_code,
        flight_no=f"{seg.carrier_code}{seg.number}",
        duration_min=parse_duration(seg.duration),
    )


def offer_to_option(offer: Offer, index: int) -> FlightOption:
    # only the outbound itinerary is mapped, return legs are ignored
    itin = offer.itineraries[0]
    legs = tuple(segment_to_leg(s) for s in itin.segments)
    return FlightOption(
        id=str(offer.id) if offer.id else f"{ID_PREFIX}-{index}",
        provider=PROVIDER_AMADEUS,
        price=offer.price.total,
        currency=offer.price.currency,
        legs=legs,
        # the itinerary's own duration, which includes layovers; not a sum of legs
        total_duration_min=parse_duration(itin.duration),
        transfers=max(0, len(legs) - 1),
        notes=(),
    )


def from_amadeus(payload: Any) -> List[FlightOption]:
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []
    return [offer_to_option(decode_offer(raw, idx), idx) for idx, raw in enumerate(data)]
