"""Immutable description of an outbound spclient request."""

from dataclasses import dataclass

import httpx

CLIENT_TOKEN_HEADER = "Client-Token"
AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to (re)build one authenticated request.

    The body is kept as immutable bytes and every attempt gets its own
    ``httpx.Request``, so retries never see a consumed stream.
    """

    method: str
    url: httpx.URL
    headers: httpx.Headers
    body: bytes | None = None

    @classmethod
    def authenticated(
        cls,
        method: str,
        url: httpx.URL,
        *,
        client_token: str,
        access_token: str,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> "RequestDescriptor":
        """Build a descriptor carrying both mandatory auth headers.

        Caller headers are merged first; ``Client-Token`` and ``Authorization``
        are then set unconditionally and replace any caller value of the same
        name, whatever its case.
        """
        merged = httpx.Headers(headers or {})
        merged[CLIENT_TOKEN_HEADER] = client_token
        merged[AUTHORIZATION_HEADER] = f"Bearer {access_token}"
        return cls(
            method=method,
            url=url,
            headers=merged,
            body=bytes(body) if body else None,
        )

    def build(self, client: httpx.Client, *, timeout: httpx.Timeout | float | None = None) -> httpx.Request:
        """Build a fresh request for one attempt."""
        extra = {} if timeout is None else {"timeout": timeout}
        return client.build_request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.body,
            **extra,
        )


def cap_timeout(configured: httpx.Timeout, remaining: float | None) -> httpx.Timeout | None:
    """Cap every field of ``configured`` at ``remaining`` seconds.

    Returns None when there is no deadline, leaving the client's own timeout
    in effect. Unset (``None``) fields are capped too.
    """
    if remaining is None:
        return None

    def cap(value: float | None) -> float:
        return remaining if value is None else min(value, remaining)

    return httpx.Timeout(
        connect=cap(configured.connect),
        read=cap(configured.read),
        write=cap(configured.write),
        pool=cap(configured.pool),
    )
