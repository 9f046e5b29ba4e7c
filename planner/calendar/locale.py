"""Locale tables and date formatters for the calendar screens.

The range engine only ever asks for a short-date string; everything that
knows about month names, weekday names or the Portuguese "-feira" suffix
lives here and is injected as a formatter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from planner.calendar.range_selector import ShortDateFormatter
from planner.errors import UnknownLocaleError

DEFAULT_LOCALE = "pt-BR"
WEEKDAY_SUFFIX = "-feira"


@dataclass(frozen=True)
class DateLocale:
    """Month and weekday names for one locale.

    Attributes:
        code: Locale code (e.g., "pt-BR")
        months: Full month names, January first
        months_short: Abbreviated month names, January first
        weekdays: Full weekday names, Monday first
        connector: Word between day and month ("de" in Portuguese, "" in English)
        range_separator: Word between the endpoints of a selected range
        span_separator: Word between the endpoints of a trip span
    """

    code: str
    months: tuple[str, ...]
    months_short: tuple[str, ...]
    weekdays: tuple[str, ...]
    connector: str
    range_separator: str
    span_separator: str


PT_BR = DateLocale(
    code="pt-BR",
    months=(
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    months_short=("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"),
    weekdays=(
        "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
        "sexta-feira", "sábado", "domingo",
    ),
    connector="de",
    range_separator="até",
    span_separator="à",
)

EN = DateLocale(
    code="en",
    months=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    months_short=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    weekdays=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    connector="",
    range_separator="to",
    span_separator="to",
)

LOCALES: dict[str, DateLocale] = {PT_BR.code: PT_BR, EN.code: EN}


def get_locale(code: str) -> DateLocale:
    """Look up a registered locale.

    Raises:
        UnknownLocaleError: If the code is not registered
    """
    try:
        return LOCALES[code]
    except KeyError:
        raise UnknownLocaleError(code) from None


def _day_and_month(day: date, month_name: str, locale: DateLocale) -> str:
    if locale.connector:
        return f"{day.day} {locale.connector} {month_name}"
    return f"{day.day} {month_name}"


def short_date(day: date, locale: DateLocale = PT_BR) -> str:
    """Day number and abbreviated month ("10 de mai")."""
    return _day_and_month(day, locale.months_short[day.month - 1], locale)


def long_date(day: date, locale: DateLocale = PT_BR) -> str:
    """Day number and full month ("10 de maio")."""
    return _day_and_month(day, locale.months[day.month - 1], locale)


def weekday_name(day: date, locale: DateLocale = PT_BR) -> str:
    """Weekday name without the Portuguese "-feira" suffix."""
    return locale.weekdays[day.weekday()].replace(WEEKDAY_SUFFIX, "")


def hour_label(moment: datetime) -> str:
    """Time of day as shown in the activity list ("14:00h")."""
    return f"{moment:%H:%M}h"


def short_date_formatter(locale_code: str = DEFAULT_LOCALE) -> ShortDateFormatter:
    """Build the short-date capability handed to the range engine."""
    locale = get_locale(locale_code)

    def _format(day: date) -> str:
        return short_date(day, locale)

    return _format
