"""Error taxonomy for the search pipeline and the request layer."""


class FlightProxyError(Exception):
    """Base class; ``str(exc)`` is the message returned to the caller."""


class ValidationError(FlightProxyError):
    """The caller-supplied query is missing or malformed."""


class UpstreamError(FlightProxyError):
    """Amadeus rejected the request, returned garbage, or could not be reached."""


class AuthError(UpstreamError):
    """The client-credentials exchange failed or returned no token."""
