"""Trip creation form and the trip-level validations.

The form runs in two steps: first destination and dates, then guests.
Submission is blocked (FormValidationError) until the date picker holds a
complete range.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import IntEnum

from loguru import logger

from planner.calendar.picker import RangePicker
from planner.calendar.range_selector import RANGE_CONNECTOR, CalendarDay, Selection, ShortDateFormatter
from planner.errors import FormValidationError
from planner.forms.validation import is_valid_email
from planner.integrations.api.schemas import TripCreate

MIN_DESTINATION_LENGTH = 4

TRIP_DETAILS_TITLE = "Detalhes da viagem"
GUEST_TITLE = "Convidado"
UPDATE_TRIP_TITLE = "Atualizar viagem"
CONFIRM_PRESENCE_TITLE = "Confirmar presença"


class TripFormStep(IntEnum):
    TRIP_DETAILS = 1
    ADD_EMAILS = 2


def _midnight(day: CalendarDay) -> datetime:
    return datetime.combine(day.date, time.min)


class TripForm:
    """State of the "new trip" screen."""

    def __init__(
        self,
        formatter: ShortDateFormatter,
        min_day: CalendarDay | date | str | None = None,
        connector: str = RANGE_CONNECTOR,
    ) -> None:
        self.destination = ""
        self.step = TripFormStep.TRIP_DETAILS
        self.dates = RangePicker(formatter, min_day=min_day, connector=connector)
        self.emails_to_invite: list[str] = []

    @property
    def dates_label(self) -> str:
        return self.dates.label

    @property
    def guests_label(self) -> str:
        if not self.emails_to_invite:
            return ""
        return f"{len(self.emails_to_invite)} pessoa(s) convidada(s)"

    @property
    def is_editable(self) -> bool:
        """Destination and dates can only change on the first step."""
        return self.step is TripFormStep.TRIP_DETAILS

    def validate_details(self) -> None:
        if not self.destination.strip() or not self.dates.is_complete:
            raise FormValidationError(
                "TRIP_DETAILS_INCOMPLETE",
                "Preencha todas as informações da viagem para continuar.",
                TRIP_DETAILS_TITLE,
            )
        if len(self.destination) < MIN_DESTINATION_LENGTH:
            raise FormValidationError(
                "DESTINATION_TOO_SHORT",
                "O destino deve ter ao menos 4 caracteres",
                TRIP_DETAILS_TITLE,
            )

    def next_step(self) -> TripFormStep:
        self.validate_details()
        if self.step is TripFormStep.TRIP_DETAILS:
            self.step = TripFormStep.ADD_EMAILS
        return self.step

    def back_to_details(self) -> None:
        self.step = TripFormStep.TRIP_DETAILS

    def add_guest(self, email: str) -> None:
        email = email.strip().lower()
        if not is_valid_email(email):
            raise FormValidationError(
                "INVALID_EMAIL",
                "Digite um e-mail válido para convidar alguém.",
                GUEST_TITLE,
            )
        if email in self.emails_to_invite:
            raise FormValidationError("DUPLICATE_EMAIL", "Este e-mail já foi adicionado.", GUEST_TITLE)
        self.emails_to_invite.append(email)

    def remove_guest(self, email: str) -> None:
        self.emails_to_invite = [e for e in self.emails_to_invite if e != email]

    def to_create_payload(self) -> TripCreate:
        self.validate_details()
        selection = self.dates.selection
        payload = TripCreate(
            destination=self.destination.strip(),
            starts_at=_midnight(selection.start),
            ends_at=_midnight(selection.end),
            emails_to_invite=list(self.emails_to_invite),
        )
        logger.debug(f"[FORM] Trip payload ready for {payload.destination}")
        return payload


def pick_trip_dates(
    picker: RangePicker,
    starts_at: CalendarDay,
    ends_at: CalendarDay,
    title: str = TRIP_DETAILS_TITLE,
) -> Selection:
    """Tap both trip endpoints into a bounded picker.

    The trip calendars disable every day before today, so an endpoint the
    picker would ignore is reported instead of leaving the range open.

    Raises:
        FormValidationError: TRIP_DATE_UNAVAILABLE for a disabled endpoint
    """
    picker.reset()
    for day in (starts_at, ends_at):
        if not picker.is_enabled(day):
            raise FormValidationError(
                "TRIP_DATE_UNAVAILABLE",
                "Selecione datas a partir de hoje.",
                title,
            )
        picker.tap(day)
    return picker.selection


def validate_trip_update(destination: str, selection: Selection) -> None:
    """Block a trip update until destination and both dates are set."""
    if not destination or not selection.is_complete:
        raise FormValidationError(
            "TRIP_DATES_REQUIRED",
            "Lembre-se de, além de preencher o destino, selecione a data de início em fim da viagem.",
            UPDATE_TRIP_TITLE,
        )


def validate_guest_confirmation(name: str, email: str) -> tuple[str, str]:
    """Validate the presence-confirmation form.

    Returns:
        Stripped (name, email)
    """
    name = name.strip()
    email = email.strip()
    if not name or not email:
        raise FormValidationError(
            "GUEST_INCOMPLETE",
            "Preencha seu nome e e-mail para confirmar sua presença.",
            CONFIRM_PRESENCE_TITLE,
        )
    if not is_valid_email(email):
        raise FormValidationError("INVALID_EMAIL", "Preencha um e-mail válido.", CONFIRM_PRESENCE_TITLE)
    return name, email
