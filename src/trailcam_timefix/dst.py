"""
U.S. daylight saving time window and the correction applied to camera clocks.

Trail cameras do not adjust their clocks for DST. When a deployment (placed date
to checked date) spans a transition, footage recorded after the transition is
stamped one hour off and is shifted back into true local time here.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Tuple, Union

SUNDAY = 6
TRANSITION_HOUR = timedelta(hours=2)


@dataclass(frozen=True)
class DSTWindow:
    year: int
    begin: datetime
    end: datetime


class Correction(Enum):
    FALL_BACK = timedelta(hours=-1)
    SPRING_FORWARD = timedelta(hours=1)
    NONE = timedelta(0)

    @property
    def offset(self) -> timedelta:
        return self.value


def _first_sunday(day: datetime) -> datetime:
    while day.weekday() != SUNDAY:
        day += timedelta(days=1)
    return day


def dst_window(year: int) -> DSTWindow:
    """
    Compute the DST window for a year: second Sunday of March at 02:00 to
    first Sunday of November at 02:00, local clock time.
    """
    begin = _first_sunday(datetime(year, 3, 1)) + timedelta(days=7) + TRANSITION_HOUR
    end = _first_sunday(datetime(year, 11, 1)) + TRANSITION_HOUR
    return DSTWindow(year=year, begin=begin, end=end)


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def decide_correction(
    timestamp: datetime,
    placed: Union[date, datetime],
    checked: Union[date, datetime],
    window: DSTWindow,
) -> Correction:
    """
    Decide which shift a camera-stamped time needs.

    The fall-back transition is tested first, so it wins if a deployment could
    somehow straddle both transitions of the same year.
    """
    placed = _as_datetime(placed)
    checked = _as_datetime(checked)

    if timestamp > window.end and placed < window.end and checked > window.end:
        return Correction.FALL_BACK
    if timestamp > window.begin and placed < window.begin and checked > window.begin:
        return Correction.SPRING_FORWARD
    return Correction.NONE


def correct_timestamp(
    timestamp: datetime,
    placed: Union[date, datetime],
    checked: Union[date, datetime],
) -> Tuple[datetime, Correction]:
    # window follows the timestamp's own year, never a cached one
    window = dst_window(timestamp.year)
    correction = decide_correction(timestamp, placed, checked, window)
    return timestamp + correction.offset, correction
