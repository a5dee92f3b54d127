"""
Removes previously fetched documentation files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

log = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """What a cleanup pass removed (or would remove, in a dry run)."""

    files_removed: list[Path] = field(default_factory=list)
    dirs_removed: list[Path] = field(default_factory=list)


def _prune_empty_parents(
    directory: Path, base_dir: Path, result: CleanupResult, dry_run: bool = False
) -> None:
    """
    Removes `directory` and its ancestors while they are empty, stopping at base_dir.

    Entries already recorded in `result` count as gone, so a dry run reports the
    same directories a real run would remove.
    """
    gone = set(result.files_removed) | set(result.dirs_removed)
    while directory != base_dir and base_dir in directory.parents:
        try:
            if any(child not in gone for child in directory.iterdir()):
                return
            if not dry_run:
                directory.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning(
                f"[yellow]Could not remove directory {escape(str(directory))}:[/] "
                f"{escape(str(e))}"
            )
            return
        if directory not in result.dirs_removed:
            result.dirs_removed.append(directory)
            gone.add(directory)
        directory = directory.parent


def clean_outputs(base_dir: Path, pattern: str, dry_run: bool = False) -> CleanupResult:
    """
    Deletes every file named `pattern` under `base_dir`, then any directory
    left empty by those deletions.

    Directories that were already empty, and files with other names, are left
    untouched. Nothing is deleted when `dry_run` is set.
    """
    base_dir = base_dir.resolve()
    result = CleanupResult()

    for path in sorted(base_dir.rglob(pattern)):
        if not path.is_file():
            continue
        if dry_run:
            result.files_removed.append(path)
            continue
        try:
            path.unlink()
        except OSError as e:
            log.warning(
                f"[yellow]Could not remove {escape(str(path))}:[/] {escape(str(e))}"
            )
            continue
        result.files_removed.append(path)
        log.debug(f"Removed {escape(str(path))}")

    for path in list(result.files_removed):
        _prune_empty_parents(path.parent, base_dir, result, dry_run=dry_run)

    return result
