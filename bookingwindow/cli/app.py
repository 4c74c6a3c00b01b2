"""
Main CLI application using Typer.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.file_availability import FileAvailabilityProvider
from ..adapters.weekday_availability import WeekdayAvailabilityProvider
from ..config import AppConfig, EventTypeConfig, get_default_config_path
from ..domain.exceptions import BookingWindowError
from ..domain.models import BookingCandidate, NoLimit, RangeLimit, RollingLimit, SlotVerdict
from ..logging_config import configure_logging
from ..services.booking_window import AvailabilityProviderProtocol, BookingWindowService

app = typer.Typer(
    name="bookingwindow",
    help="Resolve booking windows and check slots against them",
    add_completion=False
)

console = Console()

state = {"verbose": False}

# Exit code of `check` for a slot that cannot be booked
NOT_BOOKABLE_EXIT_CODE = 2

VERDICT_MESSAGES = {
    SlotVerdict.BOOKABLE: "[bold green]✓ Bookable[/bold green]",
    SlotVerdict.IN_PAST: "[bold red]✗ This time has already passed[/bold red]",
    SlotVerdict.MINIMUM_NOTICE: "[bold yellow]✗ Violates the minimum booking notice[/bold yellow]",
    SlotVerdict.FUTURE_LIMIT: "[bold yellow]✗ Outside the booking window[/bold yellow]",
}

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
BookerTzOption = Annotated[
    Optional[str],
    typer.Option("--booker-tz", help="Booker timezone (IANA name). Defaults to the configured one."),
]
AvailabilityOption = Annotated[
    Optional[Path],
    typer.Option("--availability", "-a", help="JSON/YAML file with day bookability for rolling windows."),
]
NowOption = Annotated[
    Optional[str],
    typer.Option("--now", help="Evaluate as if it were this instant (ISO 8601)."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Booking window resolver.
    """
    state["verbose"] = verbose
    if verbose:
        configure_logging("DEBUG")


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    configure_logging("DEBUG" if state["verbose"] else config.log_level)
    return config


def _build_provider(config: AppConfig, availability: Optional[Path]) -> AvailabilityProviderProtocol:
    """Pick the availability source for rolling windows."""
    availability_file = availability or config.availability_file
    if availability_file:
        return FileAvailabilityProvider(availability_file)
    return WeekdayAvailabilityProvider(exclude_weekdays=config.exclude_days)


def _parse_now(now: Optional[str]) -> DateTime:
    if not now:
        return pendulum.now("UTC")
    try:
        parsed = pendulum.parse(now, tz="UTC")
    except ValueError as e:
        console.print(f"[red]Error parsing --now: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    if not isinstance(parsed, DateTime):
        console.print(f"[red]Error parsing --now: not a date-time: {escape(now)}[/red]")
        raise typer.Exit(1)
    return parsed


def _describe_limits(limits, booker_tz: str, event_tz: str) -> str:
    if isinstance(limits, RollingLimit):
        local_end = limits.end.in_timezone(booker_tz)
        return f"until {local_end.format('dddd, DD.MM.YYYY HH:mm')} ({booker_tz})"
    if isinstance(limits, RangeLimit):
        start = limits.start.in_timezone(event_tz).format("DD.MM.YYYY HH:mm")
        end = limits.end.in_timezone(event_tz).format("DD.MM.YYYY HH:mm")
        return f"{start} - {end} ({event_tz})"
    if isinstance(limits, NoLimit):
        return "no future limit"
    return str(limits)


def _period_summary(event_type: EventTypeConfig) -> str:
    period = event_type.period
    if period.period_type.value in ("ROLLING", "ROLLING_WINDOW"):
        unit = "calendar days" if period.period_count_calendar_days else "business days"
        return f"{period.period_type.value} ({period.period_days} {unit})"
    if period.period_type.value == "RANGE":
        return f"RANGE ({period.period_start_date} - {period.period_end_date})"
    return period.period_type.value


@app.command()
def limits(
    event_slug: Annotated[str, typer.Argument(help="Slug of the event type")],
    config_file: ConfigOption = None,
    booker_tz: BookerTzOption = None,
    availability: AvailabilityOption = None,
    now: NowOption = None,
):
    """
    Show the booking window of an event type.

    Examples:

        bookingwindow limits intro-call

        bookingwindow limits intro-call --booker-tz America/New_York
    """
    try:
        config = _load_config(config_file)
        event_type = config.get_event_type(event_slug)
        current_time = _parse_now(now)

        booker_timezone = config.resolve_booker_timezone(booker_tz)
        event_timezone = config.event_timezone(event_type)
        frame = config.timezone_frame(event_type, booker_tz, at=current_time)

        service = BookingWindowService(
            availability_provider=_build_provider(config, availability),
            clock=lambda: current_time,
        )
        period_limits = asyncio.run(
            service.resolve_limits(event_type.period.to_period_config(), frame)
        )

        table = Table(
            title=f"Booking window: {event_type.display_name()}",
            show_header=False,
        )
        table.add_column("Field", style="bold cyan")
        table.add_column("Value")
        table.add_row("Period", _period_summary(event_type))
        table.add_row("Minimum notice", f"{event_type.minimum_booking_notice} min")
        table.add_row("Event timezone", f"{event_timezone} ({frame.event_utc_offset_minutes:+d} min)")
        table.add_row("Booker timezone", f"{booker_timezone} ({frame.booker_utc_offset_minutes:+d} min)")
        table.add_row("Future limit", _describe_limits(period_limits, booker_timezone, event_timezone))

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(
    event_slug: Annotated[str, typer.Argument(help="Slug of the event type")],
    time: Annotated[str, typer.Argument(help="Slot start (ISO 8601). Without offset it is read in the booker timezone.")],
    config_file: ConfigOption = None,
    booker_tz: BookerTzOption = None,
    availability: AvailabilityOption = None,
    now: NowOption = None,
):
    """
    Check whether a slot can be booked.

    Exits with code 2 when the slot is not bookable.
    """
    try:
        config = _load_config(config_file)
        event_type = config.get_event_type(event_slug)
        current_time = _parse_now(now)
        booker_timezone = config.resolve_booker_timezone(booker_tz)

        try:
            slot_start = pendulum.parse(time, tz=booker_timezone)
        except ValueError as e:
            console.print(f"[red]Error parsing slot time: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        if not isinstance(slot_start, DateTime):
            console.print(f"[red]Error parsing slot time: not a date-time: {escape(time)}[/red]")
            raise typer.Exit(1)

        frame = config.timezone_frame(event_type, booker_tz, at=slot_start)
        service = BookingWindowService(
            availability_provider=_build_provider(config, availability),
            clock=lambda: current_time,
        )
        candidate = BookingCandidate(
            time=slot_start,
            minimum_booking_notice_minutes=event_type.minimum_booking_notice,
        )
        verdict = asyncio.run(
            service.classify(candidate, event_type.period.to_period_config(), frame)
        )

        local_start = slot_start.in_timezone(booker_timezone)
        console.print(f"\n{local_start.format('dddd, DD.MM.YYYY HH:mm')} ({booker_timezone})")
        console.print(f"{VERDICT_MESSAGES[verdict]}\n")

    except (FileNotFoundError, ValueError, BookingWindowError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if verdict is not SlotVerdict.BOOKABLE:
        raise typer.Exit(NOT_BOOKABLE_EXIT_CODE)


@app.command()
def list_event_types(
    config_file: ConfigOption = None,
):
    """
    List all configured event types.
    """
    try:
        config = _load_config(config_file)

        if not config.event_types:
            console.print("[yellow]No event types defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured event types",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Slug", style="bold yellow")
        table.add_column("Title")
        table.add_column("Period")
        table.add_column("Notice", justify="right")
        table.add_column("Timezone", style="dim")

        for event_type in config.event_types:
            table.add_row(
                event_type.slug,
                event_type.title,
                _period_summary(event_type),
                f"{event_type.minimum_booking_notice} min",
                config.event_timezone(event_type),
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingwindow[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
