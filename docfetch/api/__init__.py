"""
Content API Layer.

This package handles all communication with the remote documentation API.
"""

from .client import ContentAPIClient

__all__ = ["ContentAPIClient"]
