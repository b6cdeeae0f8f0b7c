"""RFC 2822 date parsing for feed publication dates."""

import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

# Whole-string shape of an RFC 2822 date-time, including the obsolete
# named zones. parsedate_to_datetime ignores trailing tokens and missing
# zones, so it only runs on text that matches.
RFC2822_DATE = re.compile(
    r"(?:(?P<weekday>Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s*)?"
    r"\d{1,2}\s+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{4}\s+"
    r"\d{2}:\d{2}(?::\d{2})?\s+"
    r"(?P<zone>[+-]\d{4}|UT|GMT|[ECMP][SD]T|Z)",
    re.IGNORECASE,
)


class InvalidDateError(ValueError):
    """Raised when a publication date is not a valid RFC 2822 date-time."""

    def __init__(self, text: str, reason: str = "not an RFC 2822 date-time"):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid publication date {text!r}: {reason}")


def parse_rfc2822(text: str) -> datetime:
    """Parse an RFC 2822 date such as ``Tue, 03 Jun 2003 09:39:21 GMT``.

    The whole text must be one date-time with an explicit zone, either a
    numeric offset or one of the RFC 2822 zone names (UT, GMT, EST, ...).
    The result always carries a fixed UTC offset. A ``-0000`` zone, which
    RFC 2822 uses for "no zone information", is read as UTC.

    Raises:
        InvalidDateError: If the text is empty or not RFC 2822
    """
    if not text or not text.strip():
        raise InvalidDateError(text, "empty date")
    match = RFC2822_DATE.fullmatch(text.strip())
    if match is None:
        raise InvalidDateError(text)
    try:
        parsed = parsedate_to_datetime(text.strip())
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidDateError(text) from e

    if parsed.tzinfo is None:
        if match.group("zone") != "-0000":
            raise InvalidDateError(text, "unknown time zone")
        parsed = parsed.replace(tzinfo=UTC)

    weekday = match.group("weekday")
    if weekday and WEEKDAYS.index(weekday.lower()) != parsed.weekday():
        raise InvalidDateError(text, "weekday does not match the date")
    return parsed
