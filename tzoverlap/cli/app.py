"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.zone_converter import ZoneConverter
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TzOverlapError
from ..domain.models import WorkingHourRange
from ..services.overlap_finder import OverlapFinderService, OverlapReport

app = typer.Typer(
    name="tzoverlap",
    help="Find overlapping working hours between two time zones",
    add_completion=False
)

console = Console()

_QUALITY_STYLES = {
    "perfect-time": "bold green",
    "acceptable-time": "yellow",
    "not-recommended": "red",
}


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the config file, or fall back to defaults when none exists."""
    config_path = config_file or get_default_config_path()

    if config_file is None and not config_path.exists():
        return AppConfig()

    return AppConfig.load_from_yaml(config_path)


def _parse_hours(value: Optional[str], fallback: WorkingHourRange) -> WorkingHourRange:
    """
    Parse a working-hour option such as "9-18" or "22-6".
    """
    if value is None:
        return fallback

    parts = value.split("-")
    if len(parts) != 2 or not all(part.strip().isdigit() for part in parts):
        console.print(f"[red]Fehler: Ungültige Arbeitszeiten '{value}' (Format: START-ENDE, z. B. 9-18)[/red]")
        raise typer.Exit(1)

    return WorkingHourRange(start=int(parts[0]), end=int(parts[1]))


def _parse_date(value: Optional[str]):
    if value is None:
        return pendulum.today().date()

    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Fehler beim Parsen des Datums: {e}[/red]")
        raise typer.Exit(1)


def _print_report(report: OverlapReport, service: OverlapFinderService) -> None:
    name_a = report.location_a.name
    name_b = report.location_b.name

    console.print("[bold cyan]📊 Zusammenfassung:[/bold cyan]")
    console.print(f"   {name_a}: {report.hours_a} ({report.location_a.timezone})")
    console.print(f"   {name_b}: {report.hours_b} ({report.location_b.timezone})")
    console.print()

    overlap = report.overlap
    if not overlap.has_overlap:
        console.print(
            "[yellow]⚠ Keine gemeinsamen Arbeitszeiten gefunden.[/yellow]\n"
            "Passen Sie die Arbeitszeiten an oder wählen Sie andere Orte."
        )
        return

    console.print(f"[bold green]✓ Überschneidung: {overlap.duration_minutes} Minuten[/bold green]")
    console.print(f"   {name_a}: {overlap.local_a}")
    console.print(f"   {name_b}: {overlap.local_b}")

    if overlap.is_limited:
        console.print("[yellow]⚠ Weniger als 1 Stunde gemeinsame Arbeitszeit.[/yellow]")

    table = Table(
        title="Terminvorschläge",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Vorschlag", style="bold")
    table.add_column("Qualität")
    table.add_column("Dauer", justify="right")

    largest = report.largest
    for suggestion in report.suggestions:
        style = _QUALITY_STYLES[suggestion.quality.slug]
        marker = " ★" if suggestion is largest else ""
        table.add_row(
            service.format_suggestion(report, suggestion) + marker,
            f"[{style}]{suggestion.quality.label}[/{style}]",
            f"{suggestion.duration_minutes} Min.",
        )

    console.print()
    console.print(table)
    console.print("★ = längster Zeitraum")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Find overlapping working hours between two time zones.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def overlap(
    location_a: Annotated[str, typer.Argument(help="Erster Ort (Name aus der Config oder Zeitzone, z. B. America/New_York)")],
    location_b: Annotated[str, typer.Argument(help="Zweiter Ort (Name aus der Config oder Zeitzone, z. B. Europe/London)")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    date: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD), defaults to today")] = None,
    hours_a: Annotated[Optional[str], typer.Option("--hours-a", help="Working hours for the first location, e.g. 9-18")] = None,
    hours_b: Annotated[Optional[str], typer.Option("--hours-b", help="Working hours for the second location, e.g. 9-18")] = None,
):
    """
    Show shared working hours and meeting suggestions for two locations.

    Examples:

        tzoverlap overlap America/New_York Europe/London

        tzoverlap overlap "New York" Tokyo --date 2024-06-15

        tzoverlap overlap Europe/Berlin Asia/Kolkata --hours-a 8-16
    """
    try:
        config = _load_config(config_file)

        try:
            loc_a = config.resolve_location(location_a)
            loc_b = config.resolve_location(location_b)
        except ValueError as e:
            console.print(f"[bold red]Fehler:[/bold red] {escape(str(e))}")
            raise typer.Exit(1)

        working_a = _parse_hours(hours_a, config.working_hours_for(location_a))
        working_b = _parse_hours(hours_b, config.working_hours_for(location_b))
        day = _parse_date(date)

        console.print("\n" + "="*60)
        console.print(f"[bold cyan]🌍  Gemeinsame Arbeitszeiten am {day.isoformat()}[/bold cyan]")
        console.print("="*60 + "\n")

        service = OverlapFinderService()
        report = service.find_overlap(
            location_a=loc_a,
            location_b=loc_b,
            hours_a=working_a,
            hours_b=working_b,
            date=day,
        )

        _print_report(report, service)
        console.print()

    except (FileNotFoundError, ValueError, TzOverlapError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def offset(
    zone: Annotated[str, typer.Argument(help="IANA timezone, e.g. Asia/Kathmandu")],
    date: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD), defaults to now")] = None,
):
    """
    Show the UTC offset of a timezone and whether it observes DST.
    """
    converter = ZoneConverter()

    if not converter.is_valid_zone(zone):
        console.print(f"[bold red]Fehler:[/bold red] Unbekannte Zeitzone: {escape(zone)}")
        raise typer.Exit(1)

    if date is None:
        instant = pendulum.now("UTC")
    else:
        day = _parse_date(date)
        instant = converter.to_absolute(pendulum.naive(day.year, day.month, day.day, 12), zone)

    minutes = converter.offset_minutes(zone, instant)
    sign = "+" if minutes >= 0 else "-"
    hours, rest = divmod(abs(minutes), 60)
    dst = "ja" if converter.observes_dst(zone, instant.year) else "nein"

    console.print(f"\n[bold]{zone}[/bold]: UTC{sign}{hours:02d}:{rest:02d} ({minutes} Min.), Sommerzeit: {dst}\n")


@app.command()
def list_locations(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured locations.
    """
    try:
        config = _load_config(config_file)

        if not config.locations:
            console.print("[yellow]Keine Orte in der Config-Datei definiert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Orte",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("Land")
        table.add_column("Zeitzone", style="dim")
        table.add_column("Arbeitszeiten")

        for location in config.locations:
            table.add_row(
                location.name,
                location.country,
                location.timezone,
                str(config.working_hours_for(location.name)),
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]tzoverlap[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
