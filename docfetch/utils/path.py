"""
Utilities for handling file paths.
"""

from pathlib import Path


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def display_path(path: Path, base_dir: Path) -> str:
    """Shows `path` relative to `base_dir` when it lives under it."""
    try:
        return str(path.relative_to(base_dir))
    except ValueError:
        return str(path)
