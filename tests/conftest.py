import os
import sys
import asyncio
import inspect
import json

import httpx
import pytest

# Ensure project root is on sys.path so `import flightproxy` works in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from flightproxy.config import AmadeusCredentials  # noqa: E402
from flightproxy.obs.metrics import reset_metrics  # noqa: E402
from flightproxy.search import SearchPipeline  # noqa: E402


def pytest_pyfunc_call(pyfuncitem):
    """Allow running async tests without pytest-asyncio.

    If the test function is a coroutine, run it in a fresh event loop.
    """
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        funcargs = pyfuncitem.funcargs
        sig = inspect.signature(testfunction)
        allowed = {name: funcargs[name] for name in sig.parameters.keys() if name in funcargs}
        asyncio.run(testfunction(**allowed))
        return True
    return None


@pytest.fixture(autouse=True)
def _fresh_metrics():
    reset_metrics()
    yield


@pytest.fixture
def credentials():
    return AmadeusCredentials(
        client_id="TEST_ID",
        client_secret="TEST_SECRET",
        base_url="https://test.api.amadeus.com",
    )


def _segment(origin, destination, depart, arrive, carrier="AA", number="100", duration="PT2H"):
    return {
        "departure": {"iataCode": origin, "at": depart},
        "arrival": {"iataCode": destination, "at": arrive},
        "carrierCode": carrier,
        "number": number,
        "duration": duration,
    }


def _offer(price, duration="PT5H", offer_id=None, segments=None, currency="USD"):
    offer = {
        "type": "flight-offer",
        "price": {"total": str(price), "currency": currency, "grandTotal": str(price)},
        "itineraries": [
            {
                "duration": duration,
                "segments": segments or [
                    _segment("JFK", "LAX", "2024-06-01T08:00:00", "2024-06-01T11:00:00", duration=duration)
                ],
            }
        ],
    }
    if offer_id is not None:
        offer["id"] = offer_id
    return offer


@pytest.fixture
def make_segment():
    return _segment


@pytest.fixture
def make_offer():
    return _offer


class AmadeusStub:
    """In-memory Amadeus: answers the token and flight-offers endpoints."""

    def __init__(self, credentials):
        self.credentials = credentials
        self.requests = []
        self.token_status = 200
        self.token_json = {"access_token": "TEST_TOKEN", "expires_in": 1799}
        self.offers_status = 200
        self.offers_json = {"data": []}
        self.token_exc = None
        self.offers_exc = None
        self.offers_text = None  # raw body, overrides offers_json

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/v1/security/oauth2/token"):
            if self.token_exc:
                raise self.token_exc
            return httpx.Response(self.token_status, json=self.token_json)
        if self.offers_exc:
            raise self.offers_exc
        body = self.offers_text if self.offers_text is not None else json.dumps(self.offers_json)
        return httpx.Response(
            self.offers_status, content=body, headers={"content-type": "application/json"}
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def pipeline(self) -> SearchPipeline:
        return SearchPipeline(self.credentials, transport=self.transport)

    def offer_requests(self):
        return [r for r in self.requests if r.url.path.endswith("/v2/shopping/flight-offers")]


@pytest.fixture
def amadeus(credentials):
    return AmadeusStub(credentials)
