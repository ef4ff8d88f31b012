"""Structured JSON logging to stdout.

One line per event, safe for production stdout collectors. Credentials and
bearer tokens never reach the output in full.
"""

from typing import Any, Dict
from datetime import datetime, timezone
import json

from flightproxy.obs.context import request_id_var, route_var

SECRET_FIELDS = frozenset({"client_secret", "token", "access_token", "authorization"})


def _redact_secret(value: Any) -> str:
    s = str(value) if value is not None else ""
    if len(s) <= 4:
        return "***"
    return f"***{s[-4:]}"


def log_event(event: str, **fields: Any) -> None:
    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": fields.pop("level", "INFO"),
        "event": event,
        "request_id": request_id_var.get(),
        "route": fields.pop("route", None) or route_var.get(),
    }
    for k, v in fields.items():
        payload[k] = _redact_secret(v) if k.lower() in SECRET_FIELDS else v

    # default=str keeps odd values (exceptions, dates) from breaking the line
    print(json.dumps(payload, separators=(",", ":"), default=str))
