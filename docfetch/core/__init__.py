"""
Core application engine for orchestrating the fetch process.

The `FetchOrchestrator` walks the package list in order and delegates each
network request to the `ContentAPIClient`.
"""

from .fetcher import FetchOrchestrator

__all__ = ["FetchOrchestrator"]
