"""Read-side views of a trip: header text, invitation dates and activity sections."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from planner.calendar.locale import PT_BR, DateLocale, hour_label, long_date, weekday_name
from planner.calendar.picker import SingleDayPicker
from planner.integrations.api.schemas import DayActivities, TripDetails

MAX_DESTINATION_LENGTH = 14


@dataclass(frozen=True)
class ActivityItem:
    id: str
    title: str
    hour: str
    is_past: bool


@dataclass(frozen=True)
class ActivitySection:
    """One day of the activity list.

    Attributes:
        day_number: Day of the month
        day_name: Weekday name without the "-feira" suffix
        items: Activities of that day in server order (may be empty)
    """

    day_number: int
    day_name: str
    items: list[ActivityItem]


def truncate_destination(destination: str, max_length: int = MAX_DESTINATION_LENGTH) -> str:
    if len(destination) > max_length:
        return f"{destination[:max_length]}..."
    return destination


def trip_header(trip: TripDetails, locale: DateLocale = PT_BR) -> str:
    """Header line of the trip screen ("Florianópolis, 5 à 10 de jun")."""
    end_month = locale.months_short[trip.ends_at.month - 1]
    month_part = f"{locale.connector} {end_month}" if locale.connector else end_month
    return (
        f"{truncate_destination(trip.destination)}, "
        f"{trip.starts_at.day} {locale.span_separator} {trip.ends_at.day} {month_part}"
    )


def invitation_dates(trip: TripDetails, locale: DateLocale = PT_BR) -> str:
    """Trip span shown to an invited guest ("5 de junho à 10 de junho")."""
    start = long_date(trip.starts_at.date(), locale)
    end = long_date(trip.ends_at.date(), locale)
    return f"{start} {locale.span_separator} {end}"


def _is_before(moment: datetime, now: datetime) -> bool:
    """Compare naive and aware timestamps by reading naive ones as local time."""
    if (moment.tzinfo is None) != (now.tzinfo is None):
        moment = moment.astimezone()
        now = now.astimezone()
    return moment < now


def activity_sections(days: list[DayActivities], now: datetime, locale: DateLocale = PT_BR) -> list[ActivitySection]:
    """Group the trip activities for the sectioned list.

    Args:
        days: Activities per day as returned by the API
        now: Reference moment for flagging past activities
        locale: Locale used for weekday names
    """
    sections = []
    for day in days:
        items = [
            ActivityItem(
                id=activity.id,
                title=activity.title,
                hour=hour_label(activity.occurs_at),
                is_past=_is_before(activity.occurs_at, now),
            )
            for activity in day.activities
        ]
        sections.append(
            ActivitySection(
                day_number=day.date.day,
                day_name=weekday_name(day.date, locale),
                items=items,
            )
        )
    return sections


def activity_date_picker(trip: TripDetails, locale: DateLocale = PT_BR) -> SingleDayPicker:
    """Activity-date picker restricted to the trip window."""
    return SingleDayPicker(
        min_day=trip.starts_at,
        max_day=trip.ends_at,
        formatter=lambda day: long_date(day, locale),
    )
