"""
Storage Layer.

This package handles everything that touches local files: reading the
packages list, validating run settings, and cleaning up fetched output.
"""

from .cleanup import CleanupResult, clean_outputs
from .config_manager import ConfigManager
from .package_list import PackageListParser, read_packages, select_parser

__all__ = [
    "CleanupResult",
    "ConfigManager",
    "PackageListParser",
    "clean_outputs",
    "read_packages",
    "select_parser",
]
