"""Fetches documentation packages from a remote content API into local files."""

__version__ = "0.3.0"
