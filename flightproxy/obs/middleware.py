"""ASGI middleware for request ids, latency metrics and access logging."""

from typing import Callable, Any
import time
import uuid

from flightproxy.obs.context import request_id_var, route_var
from flightproxy.obs.logger import log_event
from flightproxy.obs.metrics import record_timing, inc_counter

REQUEST_ID_HEADER = b"x-request-id"


class ObservabilityMiddleware:
    def __init__(self, app: Callable):
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable[[dict], Any]):
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        # honour an id set by an upstream proxy
        incoming = dict(scope.get("headers") or []).get(REQUEST_ID_HEADER)
        req_id = incoming.decode("latin-1") if incoming else str(uuid.uuid4())
        request_id_var.set(req_id)
        route_var.set(None)
        method = scope.get("method", "")
        path = scope.get("path", "")
        start = time.monotonic()
        status_code = 500

        async def send_wrapper(message: dict):
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 200))
                headers = list(message.get("headers") or [])
                headers.append((REQUEST_ID_HEADER, req_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (time.monotonic() - start) * 1000.0
            record_timing("request_latency_ms", elapsed_ms, {"route": path})
            inc_counter("requests_total", {"route": path, "status": str(status_code)})
            log_event(
                "request",
                method=method,
                path=path,
                status=status_code,
                ms_total=round(elapsed_ms, 2),
            )
