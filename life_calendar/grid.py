"""Elapsed-week classification for the 90x52 life grid."""

import datetime
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from life_calendar.dates import (
    age_in_years,
    to_calendar_date,
    weeks_lived,
    weeks_since_last_birthday,
)

logger = logging.getLogger(__name__)

TOTAL_YEARS: int = 90
WEEKS_PER_YEAR: int = 52
TOTAL_WEEKS: int = TOTAL_YEARS * WEEKS_PER_YEAR
LABEL_EVERY: int = 5


@dataclass(frozen=True)
class LifeExpectancyMark:
    label: str
    year_index: int
    week_index: int

    @property
    def coordinate(self) -> tuple[int, int]:
        return self.year_index, self.week_index


WOMEN_MARK = LifeExpectancyMark(label="women", year_index=81, week_index=15)
MEN_MARK = LifeExpectancyMark(label="men", year_index=76, week_index=10)
LIFE_EXPECTANCY_MARKS: tuple[LifeExpectancyMark, ...] = (WOMEN_MARK, MEN_MARK)


def grid_coordinates() -> Iterator[tuple[int, int]]:
    """Yields every (year_index, week_index) pair, row by row."""
    for year_index in range(TOTAL_YEARS):
        for week_index in range(WEEKS_PER_YEAR):
            yield year_index, week_index


def row_label(year_index: int) -> str:
    year_number = year_index + 1
    if year_number % LABEL_EVERY == 0:
        return str(year_number)
    return ""


def is_week_elapsed(
    year_index: int,
    week_index: int,
    birth: datetime.date | None,
    now: datetime.date,
) -> bool:
    """Returns True once the week's 7-day period has fully completed.

    A week in progress is not elapsed. Without a birth date nothing is.
    """
    if birth is None:
        return False
    age = age_in_years(birth, now)
    if year_index < age:
        return True
    if year_index > age:
        return False
    weeks_this_year = min(WEEKS_PER_YEAR, weeks_since_last_birthday(birth, now))
    return week_index < weeks_this_year


@dataclass(frozen=True)
class GridState:
    """Snapshot of the grid for one birth date and one observation date.

    Caches the age and the weeks elapsed in the current year-row so that
    classifying all 4680 cells does not redo the date arithmetic per cell.
    """

    birth: datetime.date | None
    now: datetime.date
    age: int = field(init=False)
    weeks_this_year: int = field(init=False)

    def __post_init__(self) -> None:
        # Frozen dataclass, so derived fields go through object.__setattr__
        object.__setattr__(self, "now", to_calendar_date(self.now))
        if self.birth is None:
            age, weeks = 0, 0
        else:
            object.__setattr__(self, "birth", to_calendar_date(self.birth))
            age = age_in_years(self.birth, self.now)
            weeks = min(WEEKS_PER_YEAR, weeks_since_last_birthday(self.birth, self.now))
        object.__setattr__(self, "age", age)
        object.__setattr__(self, "weeks_this_year", weeks)
        logger.debug(
            "Grid state for birth=%s now=%s: age=%d weeks_this_year=%d",
            self.birth,
            self.now,
            age,
            weeks,
        )

    @staticmethod
    def check_coordinate(year_index: int, week_index: int) -> None:
        if not 0 <= year_index < TOTAL_YEARS:
            raise ValueError(
                f"Invalid year index {year_index}, must be between 0 and {TOTAL_YEARS - 1}"
            )
        if not 0 <= week_index < WEEKS_PER_YEAR:
            raise ValueError(
                f"Invalid week index {week_index}, must be between 0 and {WEEKS_PER_YEAR - 1}"
            )

    def is_elapsed(self, year_index: int, week_index: int) -> bool:
        self.check_coordinate(year_index, week_index)
        if self.birth is None:
            return False
        if year_index < self.age:
            return True
        if year_index > self.age:
            return False
        return week_index < self.weeks_this_year

    def rows(self) -> list[list[bool]]:
        return [
            [self.is_elapsed(year_index, week_index) for week_index in range(WEEKS_PER_YEAR)]
            for year_index in range(TOTAL_YEARS)
        ]

    def elapsed_count(self) -> int:
        return sum(self.is_elapsed(y, w) for y, w in grid_coordinates())

    def weeks_lived(self) -> int:
        if self.birth is None:
            return 0
        return weeks_lived(self.birth, self.now)

    @staticmethod
    def mark_at(year_index: int, week_index: int) -> LifeExpectancyMark | None:
        for mark in LIFE_EXPECTANCY_MARKS:
            if mark.coordinate == (year_index, week_index):
                return mark
        return None
