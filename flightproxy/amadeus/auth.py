import httpx

from flightproxy.config import AmadeusCredentials
from flightproxy.errors import AuthError
from flightproxy.obs.logger import log_event
from flightproxy.obs.metrics import inc_counter

TOKEN_PATH = "/v1/security/oauth2/token"


class TokenProvider:
    """Client-credentials exchange. A fresh token is requested on every call."""

    def __init__(self, credentials: AmadeusCredentials, http: httpx.AsyncClient):
        self._credentials = credentials
        self._http = http

    async def acquire_token(self) -> str:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
        }
        try:
            r = await self._http.post(
                f"{self._credentials.base_url}{TOKEN_PATH}",
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            inc_counter("upstream_errors_total", {"kind": "auth"})
            raise AuthError(f"Amadeus token request failed: {type(e).__name__}: {e}") from e

        if not r.is_success:
            inc_counter("upstream_errors_total", {"kind": "auth"})
            log_event("amadeus_token_rejected", level="ERROR", status=r.status_code, body=r.text[:300])
            raise AuthError(f"Amadeus token request rejected with HTTP {r.status_code}")

        try:
            j = r.json()
        except ValueError as e:
            inc_counter("upstream_errors_total", {"kind": "auth"})
            raise AuthError("Amadeus token response is not JSON") from e

        token = j.get("access_token") if isinstance(j, dict) else None
        if not token:
            inc_counter("upstream_errors_total", {"kind": "auth"})
            raise AuthError("Amadeus token response has no access_token")

        log_event("amadeus_token_acquired", expires_in=j.get("expires_in"))
        return token
