"""Shared HTTP client configuration."""

import httpx

from spclient._version import __version__
from spclient.exceptions import ConfigurationError

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Per-attempt request timeout in seconds.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        headers={"User-Agent": f"spclient-sdk/{__version__}"},
    )


def build_base_url(address: str) -> httpx.URL:
    """Build the canonical ``https://<address>/`` base URL.

    Args:
        address: ``host[:port]`` as returned by the address resolver.

    Returns:
        The parsed base URL.

    Raises:
        ConfigurationError: If the address does not form a valid absolute URL.
    """
    if not isinstance(address, str) or not address.strip():
        raise ConfigurationError(f"invalid spclient address: {address!r}")

    try:
        url = httpx.URL(f"https://{address.strip()}/")
    except (httpx.InvalidURL, ValueError) as e:
        raise ConfigurationError(f"invalid spclient base url for address {address!r}: {e}") from e

    if not url.host or url.path != "/" or url.query or url.fragment:
        raise ConfigurationError(f"invalid spclient base url for address {address!r}")
    if url.port is not None and not 0 < url.port < 65536:
        raise ConfigurationError(f"invalid spclient port for address {address!r}")
    return url


def join_path(base_url: httpx.URL, path: str) -> httpx.URL:
    """Join a relative path onto the base URL.

    ``.`` and ``..`` segments are resolved and clamped at the base root, and
    repeated slashes collapse, so the result always stays under ``base_url``.
    """
    segments: list[str] = [s for s in base_url.path.split("/") if s]
    root_depth = len(segments)
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if len(segments) > root_depth:
                segments.pop()
            continue
        segments.append(segment)

    joined = "/" + "/".join(segments)
    if path.endswith("/") and segments:
        joined += "/"
    return base_url.copy_with(path=joined)
