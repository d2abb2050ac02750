"""Birth date acquisition: the ``dob`` location parameter and the picker."""

import datetime
import logging
import urllib.parse

from life_calendar.dates import parse_date

logger = logging.getLogger(__name__)

DOB_PARAMETER: str = "dob"


class LockedInputError(RuntimeError):
    pass


def read_dob_parameter(location: str | None) -> datetime.date | None:
    """Reads the ``dob`` parameter from a URL or a bare query string.

    Returns None when the parameter is missing or is not a valid date.
    """
    if not location:
        return None

    parsed = urllib.parse.urlsplit(location)
    query = parsed.query
    if not (parsed.scheme or parsed.netloc or parsed.path.startswith("/")):
        # Bare query string such as "dob=1990-01-01" or "?dob=1990-01-01"
        query = query or location.lstrip("?")

    values = urllib.parse.parse_qs(query, keep_blank_values=True).get(DOB_PARAMETER)
    if not values:
        return None
    birth = parse_date(values[0])
    if birth is None:
        logger.debug("Ignoring invalid %s parameter %r", DOB_PARAMETER, values[0])
    return birth


class BirthDateInput:
    """The single birth date the grid is drawn for.

    Sourced either once from the location parameter, which locks it and hides
    the picker, or from picker commits, each replacing the previous value.
    """

    def __init__(self, *, birth: datetime.date | None = None, locked: bool = False) -> None:
        if locked and birth is None:
            raise ValueError("A locked birth date input needs a date")
        self._birth: datetime.date | None = birth
        self._locked: bool = locked
        self.text: str | None = birth.isoformat() if birth else None

    @classmethod
    def from_location(cls, location: str | None) -> "BirthDateInput":
        birth = read_dob_parameter(location)
        if birth is None:
            return cls()
        return cls(birth=birth, locked=True)

    @property
    def birth(self) -> datetime.date | None:
        return self._birth

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def picker_visible(self) -> bool:
        return not self._locked

    def commit(self, text: str) -> datetime.date | None:
        """Replaces the picker value. Invalid text clears the birth date."""
        if self._locked:
            raise LockedInputError(f"Birth date was set from the {DOB_PARAMETER!r} parameter")
        self.text = text
        self._birth = parse_date(text.strip())
        return self._birth

    def __repr__(self) -> str:
        return f"{type(self).__name__}(birth={self._birth!r}, locked={self._locked!r})"
