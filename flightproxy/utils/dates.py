import dateparser
from datetime import date
from typing import Optional

from flightproxy.errors import ValidationError


def to_api_date(text: str, field: str = "start") -> str:
    """Convert a caller-supplied date or datetime to Amadeus' ``YYYY-MM-DD``.

    ISO strings ("2024-06-01", "2024-06-01T08:30:00Z") are taken at face value;
    anything else goes through dateparser with strict parsing so partial
    dates like "June" are rejected instead of guessed.
    """
    value = str(text or "").strip()
    # only a date, or a date followed by a time part
    if value[10:11] in ("", "T", " "):
        try:
            return date.fromisoformat(value[:10]).isoformat()
        except ValueError:
            pass

    dt = dateparser.parse(value, settings={"STRICT_PARSING": True})
    if dt:
        return dt.date().isoformat()
    raise ValidationError(f"{field} must be a valid date")


def optional_api_date(text: Optional[str], field: str = "end") -> Optional[str]:
    if not text:
        return None
    return to_api_date(text, field)
