"""
The orchestrator that turns package descriptors into fetched files.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import aiofiles
from rich.console import Console
from rich.markup import escape

from docfetch.api.client import ContentAPIClient
from docfetch.exceptions import DirectoryCreationError, FetchError, WriteError
from docfetch.models.package import PackageDescriptor
from docfetch.models.stats import FetchStats
from docfetch.utils.path import create_dir

log = logging.getLogger(__name__)


class FetchOrchestrator:
    """
    Fetches packages one at a time, in order, isolating failures per package.

    Each package ends in exactly one outcome: its file is written, it is
    reported as failed, or it is skipped for missing fields. No single
    package can abort the run.
    """

    def __init__(self, client: ContentAPIClient, console: Console | None = None):
        self.client = client
        self.console = console or Console()

    def _print(self, message: str) -> None:
        self.console.print(message, soft_wrap=True, highlight=False, emoji=False)

    async def run(
        self, packages: Iterable[PackageDescriptor], base_dir: Path
    ) -> FetchStats:
        """Processes every package in sequence and returns the session statistics."""
        stats = FetchStats()
        self._print("Fetching documentation packages...")

        for package in packages:
            if not package.is_complete:
                log.warning(
                    f"[yellow]Skipping package '{escape(package.name or '?')}': "
                    f"missing {', '.join(package.missing_fields())}.[/yellow]"
                )
                stats.record_skip()
                continue

            try:
                size = await self.fetch_package(package, base_dir)
            except FetchError as e:
                self._print(f"    [red]FAILED: {escape(package.name)}[/red]")
                log.debug(f"{escape(package.name)}: {escape(str(e))}")
                stats.record_failure(package.name)
            else:
                self._print(f"    [green]-> {escape(package.output)}[/green]")
                stats.record_success(size)

        self._print("Done.")
        return stats

    async def fetch_package(self, package: PackageDescriptor, base_dir: Path) -> int:
        """
        Fetches a single package and writes it to its output path.

        Returns:
            The number of bytes written.

        Raises:
            FetchError: If any step fails; nothing is written in that case.
        """
        self._print(f"  Fetching: {escape(package.name)}")
        output_path = package.resolve_output(base_dir)
        try:
            create_dir(output_path.parent)
        except OSError as e:
            raise DirectoryCreationError(
                f"Could not create '{output_path.parent}': {e}"
            ) from e

        url = package.request_url()
        log.debug(f"GET {escape(url)}")
        body = await self.client.fetch(url)

        try:
            async with aiofiles.open(output_path, "wb") as f:
                await f.write(body)
        except OSError as e:
            raise WriteError(f"Could not write '{output_path}': {e}") from e
        return len(body)
