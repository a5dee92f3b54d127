"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from docfetch import __version__
from docfetch.api.client import ContentAPIClient
from docfetch.core.fetcher import FetchOrchestrator
from docfetch.exceptions import ConfigurationError
from docfetch.models.config import (
    DEFAULT_CLEAN_PATTERN,
    DEFAULT_PACKAGES_FILE,
    PARSER_CHOICES,
    FetchConfig,
)
from docfetch.models.stats import FetchStats
from docfetch.storage.cleanup import clean_outputs
from docfetch.storage.config_manager import ConfigManager
from docfetch.storage.package_list import (
    YamlPackageParser,
    read_packages,
    select_parser,
)
from docfetch.utils.schema_validator import validate_packages_document

from .formatters import (
    format_error_with_suggestions,
    print_cleanup_result,
    print_packages_table,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("docfetch")

app = typer.Typer(
    name="docfetch",
    help=(
        "Fetch documentation packages listed in packages.yaml into local files."
        " Use 'docfetch <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _fail(error: Exception) -> None:
    console.print(format_error_with_suggestions(error))
    raise typer.Exit(code=1) from error


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Documentation package fetcher"""
    if version:
        console.print(f"[bold]docfetch[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose >= 2:
        log_level = "DEBUG"
    elif verbose == 1:
        log_level = "INFO"
    logging.getLogger("docfetch").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _config_option() -> Path:
    return typer.Option(
        Path(DEFAULT_PACKAGES_FILE),
        "--config",
        "-c",
        help="Path to the packages file.",
    )


def _parser_option() -> str | None:
    return typer.Option(
        None,
        "--parser",
        help=f"Package list parser: {', '.join(PARSER_CHOICES)} (default auto).",
    )


@app.command(name="fetch")
def fetch_command(
    config_path: Path = _config_option(),  # noqa: B008
    base_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--base-dir",
        help="Directory that output paths are relative to (default: the packages"
        " file's directory).",
    ),
    parser: str | None = _parser_option(),
    connect_timeout: float | None = typer.Option(
        None, "--connect-timeout", help="Seconds to wait for a connection."
    ),
    read_timeout: float | None = typer.Option(
        None, "--read-timeout", help="Seconds to wait between received data."
    ),
    summary: bool = typer.Option(
        False, "--summary", help="Show a summary panel after fetching."
    ),
):
    """Fetch all documentation packages."""
    try:
        config = ConfigManager(config_path).load_config(
            {
                "base_dir": base_dir,
                "parser": parser,
                "connect_timeout": connect_timeout,
                "read_timeout": read_timeout,
                "show_summary": summary,
            }
        )
        packages = read_packages(config.config_path, select_parser(config.parser))
    except ConfigurationError as e:
        _fail(e)

    async def _fetch_async() -> FetchStats:
        async with ContentAPIClient(
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            user_agent=config.user_agent,
        ) as client:
            orchestrator = FetchOrchestrator(client, console)
            return await orchestrator.run(packages, config.base_dir)

    stats = asyncio.run(_fetch_async())
    log.info(
        f"{stats.succeeded} fetched, {stats.failed} failed, {stats.skipped} skipped."
    )
    if config.show_summary:
        print_summary_panel(stats, console)


@app.command(name="clean")
def clean_command(
    config_path: Path = _config_option(),  # noqa: B008
    base_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--base-dir",
        help="Directory to clean (default: the packages file's directory).",
    ),
    pattern: str = typer.Option(
        DEFAULT_CLEAN_PATTERN,
        "--pattern",
        help="File name of fetched documents to remove.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be removed without deleting."
    ),
):
    """Remove fetched documentation files and directories left empty."""
    try:
        config = FetchConfig(
            config_path=config_path, base_dir=base_dir, clean_pattern=pattern
        )
    except ValidationError as e:
        _fail(ConfigurationError(f"Configuration validation failed:\n{e}"))
    if not config.base_dir.is_dir():
        _fail(ConfigurationError(f"Base directory '{config.base_dir}' does not exist."))

    result = clean_outputs(config.base_dir, config.clean_pattern, dry_run=dry_run)
    print_cleanup_result(
        result, config.base_dir.resolve(), dry_run=dry_run, console=console
    )


@app.command(name="list")
def list_command(
    config_path: Path = _config_option(),  # noqa: B008
    parser: str | None = _parser_option(),
):
    """Show the packages that would be fetched."""
    try:
        config = ConfigManager(config_path).load_config({"parser": parser})
        package_parser = select_parser(config.parser)
        packages = read_packages(config.config_path, package_parser)
        schema_errors = []
        if isinstance(package_parser, YamlPackageParser):
            document = package_parser.load_document(config.config_path)
            _, schema_errors = validate_packages_document(document)
    except ConfigurationError as e:
        _fail(e)

    print_packages_table(config.config_path, packages, schema_errors, console=console)
