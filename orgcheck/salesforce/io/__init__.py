"""I/O layer (transport protocol and the aiohttp implementation)."""

from .http import HTTPClient
from .rest import SalesforceRESTTransport, parse_limit_info
from .transport import SalesforceTransport

__all__ = [
    "HTTPClient",
    "SalesforceTransport",
    "SalesforceRESTTransport",
    "parse_limit_info",
]
