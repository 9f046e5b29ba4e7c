from __future__ import annotations

from datetime import date, datetime, time, timedelta

from planner.errors import FormValidationError

NEW_ACTIVITY_TITLE = "Cadastrar atividade"


def sanitize_hour(text: str) -> str:
    """Strip decimal separators typed on the numeric keypad."""
    return text.replace(".", "").replace(",", "")


def build_occurs_at(title: str, date_string: str, hour: str) -> datetime:
    """Combine the activity day and hour into the moment it occurs.

    Args:
        title: Activity title
        date_string: Day picked on the activity calendar ("YYYY-MM-DD")
        hour: Hour of the day as typed by the user

    Returns:
        Midnight of the picked day plus `hour` hours

    Raises:
        FormValidationError: If a field is missing or the hour is not 0-23
    """
    hour = sanitize_hour(hour.strip())
    if not title.strip() or not date_string or not hour:
        raise FormValidationError("ACTIVITY_INCOMPLETE", "Preencha todos os campos para continuar.", NEW_ACTIVITY_TITLE)

    if not hour.isdecimal() or int(hour) > 23:
        raise FormValidationError("INVALID_ACTIVITY_HOUR", "Informe um horário entre 0 e 23.", NEW_ACTIVITY_TITLE)

    day = date.fromisoformat(date_string)
    return datetime.combine(day, time.min) + timedelta(hours=int(hour))
