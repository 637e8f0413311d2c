"""spclient SDK for Python.

Client for the spclient session-management HTTP API: publishing connect
state, resolving audio storage and fetching track metadata.

Public API:
    Spclient - Authenticated request dispatcher
    RetryPolicy - Backoff applied to transport failures
    TrackId - Track identifier conversions
    exceptions - Error taxonomy
    models - Protobuf messages

Internal:
    _internal.http - Shared HTTP client configuration and URL handling
    _internal.request - Request descriptors
    _internal.retry - Exponential backoff
    _internal.wire - Strict protobuf wire-format checks
"""

from spclient._internal.retry import RetryPolicy
from spclient._version import __version__
from spclient.client import Spclient
from spclient.ids import TrackId

__all__ = ["__version__", "RetryPolicy", "Spclient", "TrackId"]
