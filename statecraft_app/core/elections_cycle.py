"""Election cycle arithmetic.

A cycle is a (month, year) pair. Country president and congress elections
are held on a fixed day of the month; once that day has passed, new
elections belong to the following month's cycle. Party president elections
follow the calendar month.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True, order=True)
class ElectionCycle:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")

    @classmethod
    def of(cls, day: datetime.date) -> ElectionCycle:
        return cls(year=day.year, month=day.month)

    def next(self) -> ElectionCycle:
        if self.month == 12:
            return ElectionCycle(year=self.year + 1, month=1)
        return ElectionCycle(year=self.year, month=self.month + 1)

    def as_dict(self) -> dict[str, int]:
        return {"month": self.month, "year": self.year}


def rollover_day(election_type: str) -> int | None:
    """Day of month on which elections of this type are held, or None."""
    days: dict[str, int | None] = settings.ELECTION_ROLLOVER_DAYS
    if election_type not in days:
        raise ValueError(f"unknown election type: {election_type!r}")
    return days[election_type]


def upcoming_cycle(*, election_type: str, today: datetime.date) -> ElectionCycle:
    """Cycle that newly created elections of this type belong to."""
    day = rollover_day(election_type)
    cycle = ElectionCycle.of(today)
    if day is not None and today.day > day:
        return cycle.next()
    return cycle


def current_cycle(*, today: datetime.date) -> ElectionCycle:
    return ElectionCycle.of(today)


def voting_window_open(*, election_type: str, today: datetime.date) -> bool:
    """Whether the current cycle's elections of this type may accept votes."""
    day = rollover_day(election_type)
    return day is None or today.day >= day
