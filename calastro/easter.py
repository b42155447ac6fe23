"""Date of Easter Sunday in the Gregorian calendar."""

from __future__ import annotations

import json
import logging
from typing import Tuple

from .julian import CalendarError

__all__ = ["FIRST_EASTER_YEAR", "easter_day"]

LOGGER = logging.getLogger(__name__)

FIRST_EASTER_YEAR = 1583


def easter_day(year: int) -> Tuple[int, int]:
    """Return the ``(month, day)`` of Easter Sunday.

    Uses the algorithm given by Duffett-Smith and Meeus.

    Raises
    ------
    CalendarError
        If *year* precedes the first full Gregorian year, 1583.
    """

    if year < FIRST_EASTER_YEAR:
        LOGGER.warning(json.dumps({"event": "easter_rejected", "year": year}))
        raise CalendarError(f"Easter is only computed for {FIRST_EASTER_YEAR} and later, got {year}")

    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return month, day + 1
