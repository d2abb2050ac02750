"""Calendar arithmetic on local dates. No side effects."""

import datetime
import logging
import re

logger = logging.getLogger(__name__)

DATE_PATTERN: re.Pattern[str] = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
DAYS_PER_WEEK: int = 7


def parse_date(text: object) -> datetime.date | None:
    """Parses a strict ``YYYY-MM-DD`` string, returning None instead of raising."""
    if not isinstance(text, str):
        return None
    match = DATE_PATTERN.fullmatch(text)
    if match is None:
        return None

    year, month, day = (int(part) for part in match.groups())
    if not (year and month and day):
        return None

    try:
        candidate = datetime.date(year, month, day)
    except ValueError:
        logger.debug("Rejected out-of-range date %r", text)
        return None

    if (candidate.year, candidate.month, candidate.day) != (year, month, day):
        return None
    return candidate


def to_calendar_date(value: datetime.date) -> datetime.date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def age_in_years(birth: datetime.date, on_date: datetime.date) -> int:
    birth = to_calendar_date(birth)
    on_date = to_calendar_date(on_date)
    age = on_date.year - birth.year
    if (on_date.month, on_date.day) < (birth.month, birth.day):
        age -= 1
    return max(age, 0)


def anniversary(birth: datetime.date, year: int) -> datetime.date:
    """Returns the birthday falling in ``year``.

    A 29 February birthday lands on 1 March in non-leap years, which is the day
    `age_in_years` counts the anniversary as reached.
    """
    try:
        return datetime.date(year, birth.month, birth.day)
    except ValueError:
        if (birth.month == 2) and (birth.day == 29):  # noqa: PLR2004
            return datetime.date(year, 3, 1)
        raise


def last_birthday_on_or_before(birth: datetime.date, on_date: datetime.date) -> datetime.date:
    birth = to_calendar_date(birth)
    return anniversary(birth, birth.year + age_in_years(birth, on_date))


def weeks_since_last_birthday(birth: datetime.date, on_date: datetime.date) -> int:
    """Whole 7-day periods since the last birthday. Not clamped to a year's 52 weeks."""
    on_date = to_calendar_date(on_date)
    days: int = (on_date - last_birthday_on_or_before(birth, on_date)).days
    if days <= 0:
        return 0
    return days // DAYS_PER_WEEK


def weeks_lived(birth: datetime.date, on_date: datetime.date) -> int:
    days: int = (to_calendar_date(on_date) - to_calendar_date(birth)).days
    return max(days, 0) // DAYS_PER_WEEK
