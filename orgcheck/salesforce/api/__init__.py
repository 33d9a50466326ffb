"""High-level API."""

from .manager import SalesforceManager

__all__ = ["SalesforceManager"]
