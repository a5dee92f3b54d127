"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the application, such as configuration, package
descriptors and statistics.
"""

from .config import FetchConfig
from .package import PackageDescriptor
from .stats import FetchStats

__all__ = ["FetchConfig", "FetchStats", "PackageDescriptor"]
