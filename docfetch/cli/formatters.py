"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from docfetch.models.package import PackageDescriptor
from docfetch.models.stats import FetchStats
from docfetch.storage.cleanup import CleanupResult
from docfetch.utils.formatting import format_duration, format_size, truncate_middle
from docfetch.utils.path import display_path


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigNotFoundError": [
            "• Run the command from the directory containing packages.yaml.",
            "• Or point to the file with `--config PATH`.",
        ],
        "ConfigParseError": [
            "• Check the YAML syntax of the packages file.",
            "• The file needs a top-level `packages:` list.",
            "• Try `--parser line` for a tolerant line-by-line read.",
        ],
        "ConfigurationError": [
            "• Check the command-line options you passed.",
            "• Run `docfetch --help` for valid values.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_packages_table(
    config_path: Path,
    packages: list[PackageDescriptor],
    schema_errors: list[str] | None = None,
    console: Console | None = None,
):
    """Displays the parsed packages with the URL each one will request."""
    console = console or Console()
    table = Table(
        title=f"Packages ([dim]{escape(str(config_path))}[/dim])", box=box.ROUNDED
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="bold cyan")
    table.add_column("Request URL")
    table.add_column("Output", style="green")

    for i, package in enumerate(packages, 1):
        if package.is_complete:
            url = escape(truncate_middle(package.request_url()))
        else:
            url = f"[red]missing {', '.join(package.missing_fields())}[/red]"
        table.add_row(
            str(i), escape(package.name or "?"), url, escape(package.output or "-")
        )

    console.print(table)

    incomplete = sum(1 for p in packages if not p.is_complete)
    if incomplete:
        console.print(
            f"[yellow]⚠️  {incomplete} package(s) are incomplete and will be "
            "skipped.[/yellow]"
        )
    for message in schema_errors or []:
        console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")


def print_summary_panel(stats: FetchStats, console: Console | None = None):
    """Displays a final summary of the fetch session."""
    console = console or Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("✓ Fetched:", f"[bold green]{stats.succeeded}[/bold green]")
    if stats.skipped > 0:
        stats_table.add_row("○ Skipped:", f"[yellow]{stats.skipped}[/yellow]")
    if stats.failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.failed}[/bold red]")
        stats_table.add_row(
            "", f"[dim]{escape(', '.join(stats.failed_packages))}[/dim]"
        )

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.bytes_written)}[/cyan]"
    )
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(stats.duration_s)}[/blue]"
    )

    border_color = "green" if stats.failed == 0 else "yellow"
    console.print()
    console.print(
        Panel(
            stats_table,
            title="📚 [bold]Fetch Summary[/bold]",
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )


def print_cleanup_result(
    result: CleanupResult,
    base_dir: Path,
    dry_run: bool = False,
    console: Console | None = None,
):
    """Lists what the cleanup removed (or would remove)."""
    console = console or Console()
    verb = "Would remove" if dry_run else "Removed"

    if not result.files_removed:
        console.print("[dim]Nothing to clean.[/dim]")
        return

    for path in result.files_removed:
        console.print(
            f"  [red]-[/red] {escape(display_path(path, base_dir))}", emoji=False
        )
    for path in result.dirs_removed:
        console.print(
            f"  [red]-[/red] {escape(display_path(path, base_dir))}/", emoji=False
        )

    console.print(
        f"[green]✓ {verb} {len(result.files_removed)} file(s) and "
        f"{len(result.dirs_removed)} empty director(ies).[/green]"
    )
