"""Command line parsing for taskline.

Splits raw input lines into a command keyword and description, separates the
date/time token of deadlines and events, and validates that token.
Validation is purely syntactic: lengths and marker characters are checked,
calendar values are not.
"""

import re
from datetime import date, timedelta
from typing import Optional, Tuple

from taskline.errors import (
    InvalidEnquiryPeriodError,
    InvalidIndexError,
    MissingEnquiryDateError,
    WrongDateFormatError,
)
from taskline.models import DateToken

DEADLINE_SEPARATOR = "/by"
EVENT_SEPARATOR = "/at"

DATE_ONLY_LENGTH = 10
MIN_DATE_TIME_LENGTH = 17
MAX_DATE_TIME_LENGTH = 18
YEAR_LENGTH = 4

# Days subtracted from today for each named enquiry period.
ENQUIRY_PERIODS = {
    "today": 0,
    "this week": 7,
    "this month": 31,
}


def parse_command_and_description(raw: str) -> Tuple[str, str]:
    """Split a line into its keyword and the rest.

    Args:
        raw: Line as typed by the user

    Returns:
        (keyword, description). The keyword is lower-cased and the
        description stripped; the description is "" when nothing follows.
    """
    parts = raw.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    keyword = parts[0].lower()
    description = parts[1].strip() if len(parts) > 1 else ""
    return keyword, description


def _split_on(description: str, separator: str) -> Tuple[str, Optional[str]]:
    # The separator only counts as a whole word: "/bypass" is text.
    parts = re.split(rf"(?:^|\s){re.escape(separator)}(?:\s|$)", description, maxsplit=1)
    if len(parts) == 1:
        return description.strip(), None
    head, tail = parts
    return head.strip(), tail.strip()


def split_deadline_date_time(description: str) -> Tuple[str, Optional[str]]:
    """Split "<text> /by <token>" into text and raw token (None if no /by)."""
    return _split_on(description, DEADLINE_SEPARATOR)


def split_event_date_time(description: str) -> Tuple[str, Optional[str]]:
    """Split "<text> /at <token>" into text and raw token (None if no /at)."""
    return _split_on(description, EVENT_SEPARATOR)


def validate_date_token(token: str) -> DateToken:
    """Check a raw date/time token and wrap it.

    Rules are applied in order and the first failure is raised:
    length is 10 or 17-18; the year segment is 4 characters; a timed
    token contains ':'; a timed token contains 'AM' or 'PM'.

    Args:
        token: Raw text following the date separator

    Returns:
        DateToken wrapping the accepted string

    Raises:
        WrongDateFormatError: With ``rule`` set to the rule that failed
    """
    length = len(token)
    has_time = length != DATE_ONLY_LENGTH

    if has_time and not MIN_DATE_TIME_LENGTH <= length <= MAX_DATE_TIME_LENGTH:
        raise WrongDateFormatError(
            f"Wrong date format: '{token}'. "
            "Use YYYY-MM-DD or YYYY-MM-DD h:mm AM/PM (17-18 characters).",
            token=token,
            rule="length",
        )

    year = token.split("-", 2)[0]
    if len(year) != YEAR_LENGTH:
        raise WrongDateFormatError(
            f"Wrong date format: '{token}'. The year must come first as YYYY.",
            token=token,
            rule="year",
        )

    if has_time and ":" not in token:
        raise WrongDateFormatError(
            f"Wrong time format: '{token}'. Separate hours and minutes with ':'.",
            token=token,
            rule="colon",
        )

    if has_time and "AM" not in token and "PM" not in token:
        raise WrongDateFormatError(
            f"Wrong time format: '{token}'. End the time with AM or PM.",
            token=token,
            rule="meridiem",
        )

    return DateToken(token)


def parse_task_index(raw: str) -> int:
    """Read the task number at the end of a mark/unmark/delete line.

    Raises:
        InvalidIndexError: If the last token is missing or not a positive integer
    """
    parts = raw.split()
    if len(parts) < 2 or not parts[-1].isdecimal():
        raise InvalidIndexError(raw.strip())
    index = int(parts[-1])
    if index < 1:
        raise InvalidIndexError(raw.strip())
    return index


def parse_enquiry_period(period: str, today: Optional[date] = None) -> date:
    """Turn a stats period into the earliest completion date to report.

    Args:
        period: "today", "this week", "this month" or a number of days
        today: Reference date, defaults to date.today()

    Raises:
        MissingEnquiryDateError: If no period was given
        InvalidEnquiryPeriodError: If the period is not understood
    """
    today = today or date.today()
    normalized = " ".join(period.lower().split())
    if not normalized:
        raise MissingEnquiryDateError()

    if normalized in ENQUIRY_PERIODS:
        return today - timedelta(days=ENQUIRY_PERIODS[normalized])

    if normalized.isdecimal():
        try:
            return today - timedelta(days=int(normalized))
        except OverflowError:
            raise InvalidEnquiryPeriodError(period.strip()) from None

    raise InvalidEnquiryPeriodError(period.strip())
