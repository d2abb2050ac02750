"""Your life in weeks: a 90-year grid of 52-week rows."""

from life_calendar.dates import (
    age_in_years,
    last_birthday_on_or_before,
    parse_date,
    weeks_lived,
    weeks_since_last_birthday,
)
from life_calendar.grid import (
    LIFE_EXPECTANCY_MARKS,
    MEN_MARK,
    TOTAL_YEARS,
    WEEKS_PER_YEAR,
    WOMEN_MARK,
    GridState,
    LifeExpectancyMark,
    is_week_elapsed,
)
from life_calendar.inputs import BirthDateInput, LockedInputError, read_dob_parameter

__all__ = [
    "LIFE_EXPECTANCY_MARKS",
    "MEN_MARK",
    "TOTAL_YEARS",
    "WEEKS_PER_YEAR",
    "WOMEN_MARK",
    "BirthDateInput",
    "GridState",
    "LifeExpectancyMark",
    "LockedInputError",
    "age_in_years",
    "is_week_elapsed",
    "last_birthday_on_or_before",
    "parse_date",
    "read_dob_parameter",
    "weeks_lived",
    "weeks_since_last_birthday",
]
