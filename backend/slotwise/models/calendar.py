from __future__ import annotations

from enum import Enum


class Day(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"


class Period(str, Enum):
    p1a = "P1A"
    p1b = "P1B"
    p2a = "P2A"
    p2b = "P2B"
    break_ = "Break"
    p3a = "P3A"
    p3b = "P3B"


DAYS: tuple[Day, ...] = tuple(Day)

PERIOD_SEQUENCE: tuple[Period, ...] = (
    Period.p1a,
    Period.p1b,
    Period.p2a,
    Period.p2b,
    Period.break_,
    Period.p3a,
    Period.p3b,
)

BREAK_PERIOD = Period.break_

# First halves of the three double-period blocks.
DOUBLE_PERIOD_STARTS: frozenset[Period] = frozenset({Period.p1a, Period.p2a, Period.p3a})

PERIOD_MINUTES = 50
DAY_START_MINUTES = 9 * 60


def minutes_to_time(value: int) -> str:
    hours = value // 60
    minutes = value % 60
    return f"{hours:02d}:{minutes:02d}"


def period_bounds(period: Period) -> tuple[str, str]:
    start = DAY_START_MINUTES + PERIOD_SEQUENCE.index(period) * PERIOD_MINUTES
    return minutes_to_time(start), minutes_to_time(start + PERIOD_MINUTES)


def next_period(period: Period) -> Period | None:
    index = PERIOD_SEQUENCE.index(period)
    if index + 1 < len(PERIOD_SEQUENCE):
        return PERIOD_SEQUENCE[index + 1]
    return None


def pair_partner(start: Period) -> Period | None:
    """Second half of the double-period block opened by ``start``, if any."""
    if start not in DOUBLE_PERIOD_STARTS:
        return None
    partner = next_period(start)
    if partner is None or partner == BREAK_PERIOD:
        return None
    return partner
