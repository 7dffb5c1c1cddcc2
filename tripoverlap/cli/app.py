"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.availability_loader import FileAvailabilitySource
from ..config import AppConfig, get_default_config_path
from ..domain.dates import format_date_range, get_dates_between, to_date, weekday_label
from ..domain.exceptions import OverlapError
from ..services.overlap_finder import OverlapFinderService

app = typer.Typer(
    name="tripoverlap",
    help="Find the best overlapping block of free days for a group trip",
    add_completion=False
)

console = Console()

AvailabilityArgument = Annotated[
    Path,
    typer.Argument(help="Participant availability file (.yaml, .yml, .json or poll .csv)")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
StartOption = Annotated[Optional[str], typer.Option("--start", help="Trip start date (YYYY-MM-DD)")]
EndOption = Annotated[Optional[str], typer.Option("--end", help="Trip end date (YYYY-MM-DD)")]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", help="Block length in days")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the config file, falling back to built-in defaults when no
    config.yaml exists and none was requested explicitly.
    """
    config_path = config_file or get_default_config_path()

    if config_file is None and not config_path.exists():
        return AppConfig()

    return AppConfig.load_from_yaml(config_path)


def _configure_logging(config: AppConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else config.get_log_level()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _build_service(availability_file: Path) -> OverlapFinderService:
    return OverlapFinderService(FileAvailabilitySource(availability_file))


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def find(
    availability_file: AvailabilityArgument,
    config_file: ConfigOption = None,
    start: StartOption = None,
    end: EndOption = None,
    duration: DurationOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Number of blocks to show")
    ] = None,
    verbose: VerboseOption = False,
):
    """
    Rank the best blocks of consecutive free days.

    Examples:

        tripoverlap find friends.yaml --start 2024-06-01 --end 2024-06-30 -d 5

        tripoverlap find poll.csv --duration 3 --limit 10
    """
    try:
        config = _load_config(config_file)
        _configure_logging(config, verbose)

        start_date, end_date = config.resolve_range(start, end)
        duration_days = duration if duration is not None else config.defaults.duration_days
        top_limit = limit if limit is not None else config.defaults.top_limit

        service = _build_service(availability_file)
        best = service.find_best_periods(
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days,
            limit=top_limit
        )
    except (OverlapError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(
        f"\n[bold cyan]Trip:[/bold cyan] {start_date.isoformat()} - "
        f"{end_date.isoformat()} | [bold cyan]Block:[/bold cyan] {duration_days} day(s)\n"
    )

    if not best:
        console.print("[yellow]No matching periods found. More participants needed.[/yellow]\n")
        return

    table = Table(title="Top Overlap Periods", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Period", style="bold yellow")
    table.add_column("Dates", style="dim")
    table.add_column("Available", justify="right")
    table.add_column("People", justify="right", style="dim")

    for rank, window in enumerate(best, 1):
        table.add_row(
            str(rank),
            format_date_range(window.start_date, window.end_date),
            f"{window.start_date.isoformat()} - {window.end_date.isoformat()}",
            f"{window.availability_percent}%",
            f"{window.available_count}/{window.total_participants}"
        )

    console.print(table)
    console.print()


@app.command()
def heatmap(
    availability_file: AvailabilityArgument,
    config_file: ConfigOption = None,
    start: StartOption = None,
    end: EndOption = None,
    verbose: VerboseOption = False,
):
    """
    Show how many participants are free on each day of the trip.
    """
    try:
        config = _load_config(config_file)
        _configure_logging(config, verbose)

        start_date, end_date = config.resolve_range(start, end)
        service = _build_service(availability_file)
        counts, total = service.heatmap(start_date=start_date, end_date=end_date)
    except (OverlapError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not counts:
        console.print("[yellow]The trip range contains no days.[/yellow]")
        return

    table = Table(title="Daily Availability", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Day", style="dim")
    table.add_column("Free", justify="right")
    table.add_column("")

    for day, count in counts.items():
        table.add_row(
            day,
            weekday_label(to_date(day)),
            f"{count}/{total}",
            "[blue]" + "█" * count + "[/blue]"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def block(
    availability_file: AvailabilityArgument,
    block_start: Annotated[str, typer.Argument(help="First day of the block (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    start: StartOption = None,
    end: EndOption = None,
    duration: DurationOption = None,
    verbose: VerboseOption = False,
):
    """
    Show who can and cannot make the block starting on BLOCK_START.
    """
    try:
        config = _load_config(config_file)
        _configure_logging(config, verbose)

        start_date, end_date = config.resolve_range(start, end)
        duration_days = duration if duration is not None else config.defaults.duration_days

        details = _build_service(availability_file).inspect_block(
            block_start=block_start,
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days
        )
    except (OverlapError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if details is None:
        console.print(
            f"[bold red]Error:[/bold red] A {duration_days}-day block starting {block_start} "
            f"does not fit inside {start_date.isoformat()} - {end_date.isoformat()}."
        )
        raise typer.Exit(1)

    available = ", ".join(details.available_names()) or "-"
    unavailable = ", ".join(
        f"{name} (missing {missing} day{'' if missing == 1 else 's'})"
        for name, missing in details.unavailable_with_missing()
    ) or "-"
    total = len(details.available) + len(details.unavailable)

    console.print(Panel.fit(
        f"[bold green]Available ({len(details.available)}/{total}):[/bold green] {available}\n"
        f"[bold red]Unavailable:[/bold red] {unavailable}",
        title=format_date_range(details.start_date, details.end_date)
    ))


@app.command()
def dates(
    start: Annotated[str, typer.Argument(help="First day (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="Last day (YYYY-MM-DD)")],
):
    """
    List every day between START and END inclusive.
    """
    try:
        days = get_dates_between(start, end)
    except ValueError as e:
        _fail(e)

    if not days:
        console.print("[yellow]START is after END; no days in range.[/yellow]")
        return

    for day in days:
        console.print(day)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]tripoverlap[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
