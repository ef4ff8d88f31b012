"""
Flight search pipeline: token, fetch, normalize, rank.

Each call opens its own HTTP client, so concurrent searches share nothing.
"""

from typing import List, Optional

import httpx

from flightproxy.amadeus.client import AmadeusClient
from flightproxy.amadeus.transform import from_amadeus
from flightproxy.config import AmadeusCredentials
from flightproxy.obs.context import route_var
from flightproxy.obs.logger import log_event
from flightproxy.rank.selector import rank_options
from flightproxy.types import FlightOption, SearchQuery


class SearchPipeline:
    def __init__(
        self,
        credentials: AmadeusCredentials,
        timeout: Optional[httpx.Timeout] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.timeout = timeout or httpx.Timeout(connect=3.0, read=30.0, write=30.0, pool=30.0)
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(http2=True, timeout=self.timeout, transport=self._transport)

    async def search(self, query: SearchQuery) -> List[FlightOption]:
        route_var.set(f"{query.origin}-{query.destination}")
        async with self._http_client() as http:
            payload = await AmadeusClient(self.credentials, http).search_offers(query)

        options = from_amadeus(payload)
        ranked = rank_options(options, query.optimize)
        log_event("search_ranked", optimize=query.optimize, options=len(ranked))
        return ranked


def create_search_pipeline(settings) -> SearchPipeline:
    """Build a pipeline from application settings."""
    timeout = httpx.Timeout(
        connect=settings.AMADEUS_CONNECT_TIMEOUT,
        read=settings.AMADEUS_READ_TIMEOUT,
        write=settings.AMADEUS_READ_TIMEOUT,
        pool=settings.AMADEUS_READ_TIMEOUT,
    )
    return SearchPipeline(settings.amadeus_credentials(), timeout=timeout)
