"""Date-range selection and calendar-marking engine.

A calendar widget emits one tapped day at a time. The caller keeps the last
Selection, feeds each tap through apply_day_tap, and re-renders using
label_for and markings_for.

States:
- EMPTY: no day chosen yet
- START_ONLY: one endpoint chosen
- COMPLETE: closed range chosen (start <= end, possibly the same day)

Every function here is pure. Nothing is logged or persisted.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

ShortDateFormatter = Callable[[date], str]

RANGE_CONNECTOR = "até"


class SelectionState(StrEnum):
    EMPTY = "empty"
    START_ONLY = "start_only"
    COMPLETE = "complete"


@dataclass(frozen=True)
class CalendarDay:
    """A single day as delivered by the calendar widget.

    Attributes:
        date: Canonical date, no time component
        date_string: Literal "YYYY-MM-DD" string from the widget
        ordinal: Day ordinal used for ordering (date.toordinal())
    """

    date: date
    date_string: str
    ordinal: int

    @classmethod
    def from_date(cls, value: date) -> CalendarDay:
        return cls(date=value, date_string=value.isoformat(), ordinal=value.toordinal())

    @classmethod
    def from_string(cls, value: str) -> CalendarDay:
        """Build a day from a "YYYY-MM-DD" string.

        Raises:
            ValueError: If the string is not an ISO calendar date
        """
        return cls.from_date(date.fromisoformat(value))

    def __lt__(self, other: CalendarDay) -> bool:
        return self.ordinal < other.ordinal

    def __le__(self, other: CalendarDay) -> bool:
        return self.ordinal <= other.ordinal


@dataclass(frozen=True)
class Selection:
    """The range being built.

    `end` is only ever set together with `start`, and never before it.

    Raises:
        ValueError: If `end` is set without `start` or precedes it
    """

    start: CalendarDay | None = None
    end: CalendarDay | None = None

    def __post_init__(self) -> None:
        if self.end is None:
            return
        if self.start is None:
            raise ValueError("Selection end requires a start")
        if self.end.ordinal < self.start.ordinal:
            raise ValueError(f"Selection end {self.end.date_string} is before start {self.start.date_string}")

    @classmethod
    def empty(cls) -> Selection:
        return cls()

    @property
    def state(self) -> SelectionState:
        if self.start is None:
            return SelectionState.EMPTY
        if self.end is None:
            return SelectionState.START_ONLY
        return SelectionState.COMPLETE

    @property
    def is_complete(self) -> bool:
        return self.state is SelectionState.COMPLETE


@dataclass(frozen=True)
class MarkEntry:
    """Rendering directive for one day of the selection."""

    selected: bool
    is_range_start: bool
    is_range_end: bool
    is_within_range: bool

    def to_widget(self) -> dict[str, bool]:
        return {
            "selected": self.selected,
            "isRangeStart": self.is_range_start,
            "isRangeEnd": self.is_range_end,
            "isWithinRange": self.is_within_range,
        }


MarkingMap = dict[str, MarkEntry]


def apply_day_tap(selection: Selection, tapped: CalendarDay) -> Selection:
    """Return the selection that results from tapping `tapped`.

    A tap on an EMPTY or COMPLETE selection restarts the cycle with a
    single-day START_ONLY selection. A tap on a START_ONLY selection closes
    the range, swapping endpoints when the tap is earlier than the start.
    Tapping the start day again closes a single-day range.
    """
    state = selection.state
    if state is not SelectionState.START_ONLY:
        return Selection(start=tapped, end=None)

    start = selection.start
    if tapped.ordinal < start.ordinal:
        return Selection(start=tapped, end=start)
    return Selection(start=start, end=tapped)


def selection_days(selection: Selection) -> list[CalendarDay]:
    """List every day covered by the selection, in chronological order."""
    state = selection.state
    if state is SelectionState.EMPTY:
        return []
    if state is SelectionState.START_ONLY:
        return [selection.start]

    first = selection.start.date
    count = selection.end.ordinal - selection.start.ordinal + 1
    return [CalendarDay.from_date(first + timedelta(days=offset)) for offset in range(count)]


def markings_for(selection: Selection) -> MarkingMap:
    """Build the per-day marking map for the selection.

    The map holds exactly the selected days. The first day carries
    is_range_start, the last carries is_range_end (the same entry for a
    single day) and every day in between carries is_within_range.
    """
    days = selection_days(selection)
    if not days:
        return {}

    last_index = len(days) - 1
    markings: MarkingMap = {}
    for index, day in enumerate(days):
        is_first = index == 0
        is_last = index == last_index
        markings[day.date_string] = MarkEntry(
            selected=True,
            is_range_start=is_first,
            is_range_end=is_last,
            is_within_range=not (is_first or is_last),
        )
    return markings


def label_for(
    selection: Selection,
    formatter: ShortDateFormatter,
    connector: str = RANGE_CONNECTOR,
) -> str:
    """Human-readable label for the selection.

    Args:
        selection: Current selection
        formatter: Locale capability turning a date into a short-date string
        connector: Word placed between the two endpoints

    Returns:
        "" when empty, the start short-date for a single endpoint or a
        single-day range, otherwise "<start> até <end>".
    """
    state = selection.state
    if state is SelectionState.EMPTY:
        return ""

    start_label = formatter(selection.start.date)
    if state is SelectionState.START_ONLY or selection.start.ordinal == selection.end.ordinal:
        return start_label
    return f"{start_label} {connector} {formatter(selection.end.date)}"


def is_within_bounds(day: CalendarDay, min_day: CalendarDay | None, max_day: CalendarDay | None) -> bool:
    """Return True if `day` falls inside [min_day, max_day].

    A missing bound leaves that side open. Nothing is clamped.
    """
    if min_day is not None and day.ordinal < min_day.ordinal:
        return False
    return not (max_day is not None and day.ordinal > max_day.ordinal)
