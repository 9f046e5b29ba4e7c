"""CLI for the plann.er trip planner.

Developer CLI that drives the same picker, form and API code paths the
mobile screens use: pick a date range tap by tap, create and inspect trips,
and add activities and links.
"""

from datetime import date, datetime

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from planner.calendar.locale import get_locale, hour_label, short_date_formatter
from planner.calendar.picker import RangePicker
from planner.calendar.range_selector import CalendarDay
from planner.config.settings import settings
from planner.core.logger import setup_logger
from planner.errors import FormValidationError, PlannerAPIError, PlannerError
from planner.forms.activity_form import build_occurs_at
from planner.forms.link_form import validate_link
from planner.forms.trip_form import (
    UPDATE_TRIP_TITLE,
    TripForm,
    pick_trip_dates,
    validate_guest_confirmation,
    validate_trip_update,
)
from planner.integrations.api.client import PlannerAPIClient
from planner.integrations.api.schemas import TripUpdate
from planner.storage.trip_storage import TripStorage
from planner.trips.views import activity_date_picker, activity_sections, invitation_dates, trip_header

# Initialize Rich console for output
console = Console()

# Initialize Typer apps
app = typer.Typer(
    name="planner",
    help="plann.er CLI - pick trip dates and manage trips from the terminal",
    add_completion=False,
)
trip_app = typer.Typer(help="Create, inspect and edit trips", add_completion=False)
app.add_typer(trip_app, name="trip")


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _fail(error: PlannerError) -> typer.Exit:
    if isinstance(error, FormValidationError):
        console.print(f"[red]{error.title or 'Erro'}:[/red] {error.message}")
    else:
        console.print(f"[red]Error:[/red] {error}", style="bold red")
    return typer.Exit(1)


def _today() -> date:
    """First enabled day on the trip calendars."""
    return date.today()


def _parse_day(value: str) -> CalendarDay:
    try:
        return CalendarDay.from_string(value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] '{value}' is not a YYYY-MM-DD date")
        raise typer.Exit(2) from e


def _resolve_trip_id(trip_id: str | None, storage: TripStorage) -> str:
    resolved = trip_id or storage.get()
    if not resolved:
        console.print("[yellow]No trip id given and no current trip stored. Use 'trip use TRIP_ID'.[/yellow]")
        raise typer.Exit(1)
    return resolved


def _markings_table(markings: dict[str, dict[str, bool]]) -> Table:
    table = Table(title="Markings")
    table.add_column("Day")
    table.add_column("Start")
    table.add_column("Within")
    table.add_column("End")
    for day, entry in markings.items():
        table.add_row(
            day,
            "x" if entry["isRangeStart"] else "",
            "x" if entry["isWithinRange"] else "",
            "x" if entry["isRangeEnd"] else "",
        )
    return table


@app.command()
def pick(
    days: list[str] = typer.Argument(..., help="Tapped days, in order (YYYY-MM-DD)"),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Date locale (pt-BR, en)"),
    min_day: str | None = typer.Option(None, "--min", help="First enabled day"),
    max_day: str | None = typer.Option(None, "--max", help="Last enabled day"),
) -> None:
    """Replay calendar taps through the range picker and show the result."""
    locale_code = locale or settings.locale
    try:
        date_locale = get_locale(locale_code)
    except PlannerError as e:
        raise _fail(e) from e

    picker = RangePicker(
        short_date_formatter(locale_code),
        min_day=_parse_day(min_day) if min_day else None,
        max_day=_parse_day(max_day) if max_day else None,
        connector=date_locale.range_separator,
    )
    for value in days:
        picker.tap(_parse_day(value))

    selection = picker.selection
    console.print(f"[cyan]State:[/cyan] {selection.state}")
    if selection.start:
        console.print(f"[cyan]Start:[/cyan] {selection.start.date_string}")
    if selection.end:
        console.print(f"[cyan]End:[/cyan] {selection.end.date_string}")
    console.print(f"[cyan]Label:[/cyan] {picker.label}")
    if picker.markings:
        console.print(_markings_table(picker.markings))


@trip_app.command("create")
def create_trip(
    destination: str = typer.Argument(..., help="Where the trip goes"),
    starts_at: str = typer.Argument(..., help="First day (YYYY-MM-DD)"),
    ends_at: str = typer.Argument(..., help="Last day (YYYY-MM-DD)"),
    guests: list[str] = typer.Option([], "--guest", "-g", help="E-mail to invite (repeatable)"),
) -> None:
    """Create a trip and remember it as the current one."""
    form = TripForm(short_date_formatter(settings.locale), min_day=_today())
    form.destination = destination
    first_day, last_day = _parse_day(starts_at), _parse_day(ends_at)
    try:
        pick_trip_dates(form.dates, first_day, last_day)
        form.next_step()
        for email in guests:
            form.add_guest(email)
        payload = form.to_create_payload()
        with PlannerAPIClient() as client:
            trip_id = client.create_trip(payload)
    except PlannerError as e:
        raise _fail(e) from e

    TripStorage().save(trip_id)
    console.print(f"[green]Trip created:[/green] {trip_id} ({form.dates_label})")
    if form.guests_label:
        console.print(form.guests_label)


@trip_app.command("update")
def update_trip(
    destination: str = typer.Argument(..., help="New destination"),
    starts_at: str = typer.Argument(..., help="First day (YYYY-MM-DD)"),
    ends_at: str = typer.Argument(..., help="Last day (YYYY-MM-DD)"),
    trip_id: str | None = typer.Option(None, "--trip-id", help="Trip id (defaults to the current trip)"),
) -> None:
    """Change destination and dates of a trip."""
    resolved = _resolve_trip_id(trip_id, TripStorage())
    first_day, last_day = _parse_day(starts_at), _parse_day(ends_at)
    picker = RangePicker(short_date_formatter(settings.locale), min_day=_today())
    try:
        selection = pick_trip_dates(picker, first_day, last_day, title=UPDATE_TRIP_TITLE)
        validate_trip_update(destination, selection)
        with PlannerAPIClient() as client:
            client.update_trip(
                TripUpdate(
                    id=resolved,
                    destination=destination,
                    starts_at=datetime.combine(selection.start.date, datetime.min.time()),
                    ends_at=datetime.combine(selection.end.date, datetime.min.time()),
                )
            )
    except PlannerError as e:
        raise _fail(e) from e
    console.print("[green]Viagem atualizada.[/green]")


@trip_app.command("show")
def show_trip(trip_id: str | None = typer.Argument(None, help="Trip id (defaults to the current trip)")) -> None:
    """Show trip header, dates, participants and links."""
    resolved = _resolve_trip_id(trip_id, TripStorage())
    locale = get_locale(settings.locale)
    try:
        with PlannerAPIClient() as client:
            trip = client.get_trip(resolved)
            participants = client.get_participants(resolved)
            links = client.get_links(resolved)
    except PlannerAPIError as e:
        raise _fail(e) from e

    console.print(f"[bold]{trip_header(trip, locale)}[/bold]")
    console.print(f"[dim]{invitation_dates(trip, locale)}[/dim]")

    guests = Table(title="Convidados")
    guests.add_column("Nome")
    guests.add_column("E-mail")
    guests.add_column("Confirmado")
    for participant in participants:
        guests.add_row(participant.name or "Pendente", participant.email, "sim" if participant.is_confirmed else "não")
    console.print(guests)

    if not links:
        console.print("Nenhum link adicionado.")
    for link in links:
        console.print(f"- {link.title}: {link.url}")


@trip_app.command("activities")
def list_activities(trip_id: str | None = typer.Argument(None, help="Trip id (defaults to the current trip)")) -> None:
    """List trip activities grouped by day."""
    resolved = _resolve_trip_id(trip_id, TripStorage())
    try:
        with PlannerAPIClient() as client:
            days = client.get_activities(resolved)
    except PlannerAPIError as e:
        raise _fail(e) from e

    for section in activity_sections(days, now=datetime.now(), locale=get_locale(settings.locale)):
        console.print(f"[bold]Dia {section.day_number}[/bold] [dim]{section.day_name}[/dim]")
        if not section.items:
            console.print("  Nenhuma atividade cadastrada nessa data.")
        for item in section.items:
            style = "dim" if item.is_past else "white"
            console.print(f"  [{style}]{item.hour} {item.title}[/{style}]")


@trip_app.command("add-activity")
def add_activity(
    title: str = typer.Argument(..., help="Activity title"),
    day: str = typer.Option(..., "--day", "-d", help="Day of the activity (YYYY-MM-DD)"),
    hour: str = typer.Option(..., "--hour", help="Hour of the day (0-23)"),
    trip_id: str | None = typer.Option(None, "--trip-id", help="Trip id (defaults to the current trip)"),
) -> None:
    """Add an activity on a day inside the trip window."""
    resolved = _resolve_trip_id(trip_id, TripStorage())
    try:
        with PlannerAPIClient() as client:
            picker = activity_date_picker(client.get_trip(resolved), get_locale(settings.locale))
            if picker.tap(_parse_day(day)) is None:
                console.print(f"[red]Error:[/red] {day} is outside the trip dates")
                raise typer.Exit(1)
            occurs_at = build_occurs_at(title, picker.date_string, hour)
            activity_id = client.create_activity(resolved, occurs_at, title.strip())
    except PlannerError as e:
        raise _fail(e) from e
    console.print(f"[green]Atividade cadastrada:[/green] {activity_id} ({picker.label}, {hour_label(occurs_at)})")


@trip_app.command("add-link")
def add_link(
    title: str = typer.Argument(..., help="Link title"),
    url: str = typer.Argument(..., help="Link URL"),
    trip_id: str | None = typer.Option(None, "--trip-id", help="Trip id (defaults to the current trip)"),
) -> None:
    """Add an important link to the trip."""
    resolved = _resolve_trip_id(trip_id, TripStorage())
    try:
        title, url = validate_link(title, url)
        with PlannerAPIClient() as client:
            link_id = client.create_link(resolved, title, url)
    except PlannerError as e:
        raise _fail(e) from e
    console.print(f"[green]Link criado:[/green] {link_id}")


@trip_app.command("confirm")
def confirm_presence(
    trip_id: str = typer.Argument(..., help="Trip the guest was invited to"),
    participant_id: str = typer.Argument(..., help="Participant id from the invitation"),
    name: str = typer.Option(..., "--name", help="Full name"),
    email: str = typer.Option(..., "--email", help="Confirmation e-mail"),
) -> None:
    """Confirm a guest's presence and remember the trip as current."""
    try:
        name, email = validate_guest_confirmation(name, email)
        with PlannerAPIClient() as client:
            client.confirm_participant(participant_id, name, email)
    except PlannerError as e:
        raise _fail(e) from e
    TripStorage().save(trip_id)
    console.print("[green]Sua presença foi confirmada com sucesso.[/green]")


@trip_app.command("use")
def use_trip(trip_id: str = typer.Argument(..., help="Trip id to remember")) -> None:
    """Remember a trip as the current one."""
    TripStorage().save(trip_id)
    console.print(f"[green]Current trip:[/green] {trip_id}")


@trip_app.command("forget")
def forget_trip() -> None:
    """Forget the current trip."""
    TripStorage().remove()
    logger.info("Current trip removed")
    console.print("[yellow]Current trip removed[/yellow]")


if __name__ == "__main__":
    app()
