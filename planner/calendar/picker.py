"""Picker session holders for the calendar modals.

Each open calendar modal owns exactly one picker. The picker holds the only
mutable copy of the selection and runs every tap through the range engine.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from loguru import logger

from planner.calendar.locale import long_date
from planner.calendar.range_selector import (
    RANGE_CONNECTOR,
    CalendarDay,
    Selection,
    SelectionState,
    ShortDateFormatter,
    apply_day_tap,
    is_within_bounds,
    label_for,
    markings_for,
)


def _as_day(value: CalendarDay | date | str | None) -> CalendarDay | None:
    if value is None or isinstance(value, CalendarDay):
        return value
    if isinstance(value, str):
        return CalendarDay.from_string(value)
    if isinstance(value, datetime):
        return CalendarDay.from_date(value.date())
    return CalendarDay.from_date(value)


class RangePicker:
    """Trip-dates picker.

    Days outside [min_day, max_day] are disabled on the calendar and never
    reach the transition function.
    """

    def __init__(
        self,
        formatter: ShortDateFormatter,
        min_day: CalendarDay | date | str | None = None,
        max_day: CalendarDay | date | str | None = None,
        connector: str = RANGE_CONNECTOR,
    ) -> None:
        self._formatter = formatter
        self._connector = connector
        self.min_day = _as_day(min_day)
        self.max_day = _as_day(max_day)
        self._selection = Selection.empty()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def state(self) -> SelectionState:
        return self._selection.state

    @property
    def is_complete(self) -> bool:
        return self._selection.is_complete

    @property
    def label(self) -> str:
        return label_for(self._selection, self._formatter, self._connector)

    @property
    def markings(self) -> dict[str, dict[str, bool]]:
        """Marking map in the shape the calendar widget paints."""
        return {key: entry.to_widget() for key, entry in markings_for(self._selection).items()}

    def is_enabled(self, day: CalendarDay) -> bool:
        return is_within_bounds(day, self.min_day, self.max_day)

    def tap(self, day: CalendarDay | date | str) -> Selection:
        """Apply one tapped day and return the new selection."""
        tapped = _as_day(day)
        if not self.is_enabled(tapped):
            logger.debug(f"[PICKER] Ignoring disabled day {tapped.date_string}")
            return self._selection

        self._selection = apply_day_tap(self._selection, tapped)
        logger.debug(f"[PICKER] Tapped {tapped.date_string} -> {self._selection.state}")
        return self._selection

    def load(self, selection: Selection) -> None:
        """Replace the held selection (e.g., to pre-fill an edit form).

        Selections are ordered on construction, so a loaded one always keeps
        start <= end.
        """
        self._selection = selection
        logger.debug(f"[PICKER] Loaded {selection.state} selection")

    def reset(self) -> None:
        """Forget the selection when the modal is reopened for a fresh range."""
        self._selection = Selection.empty()


class SingleDayPicker:
    """Activity-date picker bounded by the trip window.

    `formatter` renders the chosen day for the date field ("5 de junho").
    """

    def __init__(
        self,
        min_day: CalendarDay | date | str | None = None,
        max_day: CalendarDay | date | str | None = None,
        formatter: Callable[[date], str] | None = None,
    ) -> None:
        self.min_day = _as_day(min_day)
        self.max_day = _as_day(max_day)
        self._formatter = formatter or long_date
        self.day: CalendarDay | None = None

    @property
    def label(self) -> str:
        return self._formatter(self.day.date) if self.day else ""

    @property
    def markings(self) -> dict[str, dict[str, bool]]:
        if self.day is None:
            return {}
        return {self.day.date_string: {"selected": True}}

    @property
    def date_string(self) -> str:
        return self.day.date_string if self.day else ""

    def tap(self, day: CalendarDay | date | str) -> CalendarDay | None:
        tapped = _as_day(day)
        if not is_within_bounds(tapped, self.min_day, self.max_day):
            logger.debug(f"[PICKER] Ignoring day {tapped.date_string} outside the trip window")
            return self.day
        self.day = tapped
        return self.day

    def reset(self) -> None:
        self.day = None


def selection_from_dates(starts_at: date | str, ends_at: date | str) -> Selection:
    """Rebuild a complete selection from stored trip dates.

    Endpoints are put in chronological order by replaying them as two taps.
    """
    selection = apply_day_tap(Selection.empty(), _as_day(starts_at))
    return apply_day_tap(selection, _as_day(ends_at))
