from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from flightproxy.errors import ValidationError
from flightproxy.types import SearchQuery
from flightproxy.utils.dates import optional_api_date, to_api_date

REQUIRED_FIELDS = ("from", "to", "start")


def parse_query(body: Dict[str, Any]) -> SearchQuery:
    """Turn a request body into a SearchQuery or raise ValidationError."""
    if any(not str(body.get(f) or "").strip() for f in REQUIRED_FIELDS):
        raise ValidationError("from, to, start are required")

    try:
        query = SearchQuery.model_validate(body)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"])
        raise ValidationError(f"{field}: {err['msg']}") from e

    # fail here rather than after a token has been spent
    to_api_date(query.start, "start")
    optional_api_date(query.end, "end")
    return query
