# dates.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

FALLBACK_DAY_COUNT = 5


@dataclass(frozen=True, slots=True)
class DaySpan:
    """Inclusive day count of a trip.

    ``used_fallback`` is set when the dates could not be read and the
    fixed count was substituted.
    """

    count: int
    used_fallback: bool = False


def compute_day_span(start_date: str, end_date: str) -> DaySpan:
    try:
        start = dt.date.fromisoformat(start_date)
        end = dt.date.fromisoformat(end_date)
    except (TypeError, ValueError) as e:
        logger.warning(
            "Could not parse trip dates, using default day count",
            extra={
                "start_date": start_date,
                "end_date": end_date,
                "default_days": FALLBACK_DAY_COUNT,
                "error": str(e),
            },
        )
        return DaySpan(FALLBACK_DAY_COUNT, used_fallback=True)
    return DaySpan((end - start).days + 1)


def trip_day_count(start_date: str, end_date: str) -> int:
    """Inclusive number of days between two ISO dates (5 if unreadable)."""
    return compute_day_span(start_date, end_date).count


def iter_trip_dates(start_date: str, end_date: str) -> Iterator[dt.date]:
    """Yield every date from start to end inclusive.

    Raises:
        ValueError: If either date is not ISO formatted.
    """
    start = dt.date.fromisoformat(start_date)
    end = dt.date.fromisoformat(end_date)
    # Counted offsets never step past ``end``, so date.max is safe.
    for offset in range((end - start).days + 1):
        yield start + dt.timedelta(days=offset)
