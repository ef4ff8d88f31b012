import httpx
import time
from typing import Dict, Any

from flightproxy.amadeus.auth import TokenProvider
from flightproxy.amadeus.schema import error_message
from flightproxy.config import AmadeusCredentials
from flightproxy.errors import UpstreamError
from flightproxy.obs.logger import log_event
from flightproxy.obs.metrics import inc_counter, record_timing
from flightproxy.types import SearchQuery
from flightproxy.utils.dates import optional_api_date, to_api_date

OFFERS_PATH = "/v2/shopping/flight-offers"
CURRENCY = "USD"
MAX_OFFERS = 30
ERROR_SEPARATOR = "; "


class AmadeusClient:
    def __init__(self, credentials: AmadeusCredentials, http: httpx.AsyncClient):
        self._credentials = credentials
        self._http = http
        self.tokens = TokenProvider(credentials, http)

    def build_search_params(self, query: SearchQuery) -> Dict[str, str]:
        """
        Query string for GET flight-offers. Results are never pre-sorted
        upstream; ranking happens locally after the fetch.
        """
        params = {
            "originLocationCode": query.origin,
            "destinationLocationCode": query.destination,
            "departureDate": to_api_date(query.start, "start"),
            "adults": str(query.pax or 1),
            "currencyCode": CURRENCY,
            "max": str(MAX_OFFERS),
        }
        return_date = optional_api_date(query.end, "end")
        if return_date:
            params["returnDate"] = return_date
        return params

    async def search_offers(self, query: SearchQuery) -> Any:
        params = self.build_search_params(query)
        token = await self.tokens.acquire_token()

        url = f"{self._credentials.base_url}{OFFERS_PATH}"
        t0 = time.monotonic()
        try:
            r = await self._http.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            inc_counter("upstream_errors_total", {"kind": "transport"})
            log_event("amadeus_search_transport_error", level="ERROR", error=f"{type(e).__name__}: {e}")
            raise UpstreamError(f"Amadeus search failed: {type(e).__name__}: {e}") from e
        elapsed_ms = (time.monotonic() - t0) * 1000.0
        record_timing("upstream_latency_ms", elapsed_ms, {"endpoint": "flight-offers"})

        try:
            payload = r.json()
            is_json = True
        except ValueError:
            payload, is_json = None, False

        self._raise_for_errors(r, payload)
        if not r.is_success or not is_json:
            inc_counter("upstream_errors_total", {"kind": "http"})
            log_event("amadeus_search_failed", level="ERROR", status=r.status_code, body=r.text[:300])
            if r.is_success:
                raise UpstreamError(f"Amadeus search returned a non-JSON body (HTTP {r.status_code})")
            raise UpstreamError(f"Amadeus search failed with HTTP {r.status_code}")

        data = payload.get("data") if isinstance(payload, dict) else None
        log_event(
            "amadeus_search",
            status=r.status_code,
            offers=len(data) if isinstance(data, list) else 0,
            ms=int(elapsed_ms),
        )
        return payload

    def _raise_for_errors(self, r: httpx.Response, payload: Any) -> None:
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if not errors:
            return
        if not isinstance(errors, list):
            errors = [errors]
        message = ERROR_SEPARATOR.join(error_message(e) for e in errors)
        inc_counter("upstream_errors_total", {"kind": "api"})
        log_event("amadeus_search_errors", level="ERROR", status=r.status_code, errors=len(errors), message=message)
        raise UpstreamError(message)
