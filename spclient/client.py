"""Authenticated client for the spclient session-management service."""

import logging
import threading
import time
from collections.abc import Callable
from typing import TypeVar

import betterproto
import httpx

from spclient._internal.http import DEFAULT_TIMEOUT, build_base_url, create_http_client, join_path
from spclient._internal.request import RequestDescriptor, cap_timeout
from spclient._internal.retry import RetryPolicy
from spclient._internal.wire import check_message
from spclient.exceptions import (
    AuthError,
    ConfigurationError,
    DecodeError,
    EncodeError,
    PayloadTooLargeError,
    RequestCancelledError,
    UnexpectedStatusError,
)
from spclient.ids import TrackId
from spclient.models import PutStateRequest, StorageResolveResponse, Track

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=betterproto.Message)

AddressResolver = Callable[[], str]
AccessTokenSupplier = Callable[[], str]

PROTOBUF_CONTENT_TYPE = "application/x-protobuf"
CONNECTION_ID_HEADER = "X-Spotify-Connection-Id"


class Spclient:
    """Client for the spclient HTTP API.

    Every request is authenticated with the client token given at construction
    and a bearer token fetched from ``access_token`` right before the request.
    Transport failures are retried according to ``retry_policy``; HTTP error
    statuses are not.

    The client keeps no per-call state and may be shared between threads.
    """

    def __init__(
        self,
        address_resolver: AddressResolver,
        access_token: AccessTokenSupplier,
        device_id: str,
        client_token: str,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            address_resolver: Returns the service ``host[:port]``. Called once.
            access_token: Returns a fresh bearer token. Called once per request.
            device_id: Identifier of this device, used in connect-state paths.
            client_token: Attestation token sent as ``Client-Token``.
            retry_policy: Backoff applied to transport errors.
            timeout: Per-attempt request timeout in seconds.
            http_client: Preconfigured client to use instead of creating one.
                It is not closed by :meth:`close`.

        Raises:
            ConfigurationError: If the address cannot form a valid base URL or
                ``device_id`` is empty.
        """
        if not device_id:
            raise ConfigurationError("spclient device id must not be empty")

        try:
            address = address_resolver()
        except Exception as e:
            raise ConfigurationError(f"failed resolving spclient address: {e}") from e

        self._base_url = build_base_url(address)
        self._access_token = access_token
        self._device_id = device_id
        self._client_token = client_token
        self._retry_policy = retry_policy or RetryPolicy()
        self._owns_client = http_client is None
        self._client = http_client or create_http_client(timeout=timeout)

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "Spclient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # =========================================================================
    # Request primitive
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> httpx.Response:
        """Send an authenticated request, retrying transport failures.

        Args:
            method: HTTP method.
            path: Path relative to the base URL. It cannot escape the base.
            headers: Extra headers. ``Client-Token`` and ``Authorization``
                are always overwritten.
            body: Request body, resent unchanged on every attempt.
            timeout: Overall deadline for the call in seconds.
            cancel: Event that aborts the call when set.

        Returns:
            The first response obtained, whatever its status.

        Raises:
            AuthError: If the access token cannot be obtained.
            TransportError: If every attempt failed at the network level.
            RequestCancelledError: If ``cancel`` was set.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        description = f"{method} {path}"

        descriptor = RequestDescriptor.authenticated(
            method,
            join_path(self._base_url, path),
            client_token=self._client_token,
            access_token=self._fetch_access_token(cancel, description),
            headers=headers,
            body=body,
        )

        def attempt() -> httpx.Response:
            attempt_timeout = cap_timeout(self._client.timeout, _remaining(deadline))
            request = descriptor.build(self._client, timeout=attempt_timeout)
            logger.debug("Sending spclient request %s %s", request.method, request.url)
            return self._client.send(request)

        return self._retry_policy.call(attempt, description=description, deadline=deadline, cancel=cancel)

    def _fetch_access_token(self, cancel: threading.Event | None, description: str) -> str:
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError(f"{description} request cancelled")

        try:
            token = self._access_token()
        except Exception as e:
            raise AuthError(f"failed obtaining spclient access token for {description}: {e}") from e
        if not isinstance(token, str) or not token:
            raise AuthError(f"empty spclient access token for {description}")
        return token

    # =========================================================================
    # Operations
    # =========================================================================

    def put_connect_state(
        self,
        connection_id: str,
        request: PutStateRequest,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Publish this device's connect state.

        Args:
            connection_id: Dealer connection id, sent as ``X-Spotify-Connection-Id``.
            request: The state update.
            timeout: Overall deadline for the call in seconds.
            cancel: Event that aborts the call when set.

        Raises:
            EncodeError: If the request cannot be serialized.
            PayloadTooLargeError: If the service answers 413.
            UnexpectedStatusError: For any other status but 200.
        """
        try:
            body = bytes(request)
        except Exception as e:
            raise EncodeError(f"failed marshalling PutStateRequest for device {self._device_id}: {e}") from e

        resp = self._request(
            "PUT",
            f"/connect-state/v1/devices/{self._device_id}",
            headers={
                CONNECTION_ID_HEADER: connection_id,
                "Content-Type": PROTOBUF_CONTENT_TYPE,
            },
            body=body,
            timeout=timeout,
            cancel=cancel,
        )

        if resp.status_code == 413:
            raise PayloadTooLargeError(
                f"connect state put request for device {self._device_id} too big: {len(body)} bytes",
                size=len(body),
            )
        if resp.status_code != 200:
            raise UnexpectedStatusError(
                f"invalid status code from connect state put request for device {self._device_id}: "
                f"{resp.status_code}",
                status_code=resp.status_code,
            )

        logger.debug(
            "put connect state at %d because %s",
            request.client_side_timestamp,
            request.put_state_reason,
        )

    def resolve_storage_interactive(
        self,
        file_id: bytes,
        prefetch: bool = False,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> StorageResolveResponse:
        """Resolve an audio file id to the locations serving it.

        Args:
            file_id: Raw audio file id.
            prefetch: Use the ``interactive_prefetch`` variant.
            timeout: Overall deadline for the call in seconds.
            cancel: Event that aborts the call when set.

        Returns:
            The decoded StorageResolveResponse.

        Raises:
            UnexpectedStatusError: If the status is not 200.
            DecodeError: If the body is not a valid StorageResolveResponse.
        """
        variant = "interactive_prefetch" if prefetch else "interactive"
        file_hex = file_id.hex()
        resp = self._request(
            "GET",
            f"/storage-resolve/files/audio/{variant}/{file_hex}",
            timeout=timeout,
            cancel=cancel,
        )
        if resp.status_code != 200:
            raise UnexpectedStatusError(
                f"invalid status code from storage resolve for file {file_hex}: {resp.status_code}",
                status_code=resp.status_code,
            )
        return _decode(StorageResolveResponse, resp.content, f"file {file_hex}")

    def metadata_for_track(
        self,
        track_id: TrackId,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> Track:
        """Fetch metadata for a track.

        Args:
            track_id: The track to look up.
            timeout: Overall deadline for the call in seconds.
            cancel: Event that aborts the call when set.

        Returns:
            The decoded Track.

        Raises:
            UnexpectedStatusError: If the status is not 200.
            DecodeError: If the body is not a valid Track.
        """
        track_hex = track_id.hex()
        resp = self._request("GET", f"/metadata/4/track/{track_hex}", timeout=timeout, cancel=cancel)
        if resp.status_code != 200:
            raise UnexpectedStatusError(
                f"invalid status code from track metadata for track {track_hex}: {resp.status_code}",
                status_code=resp.status_code,
            )
        return _decode(Track, resp.content, f"track {track_hex}")


def _decode(message_type: type[M], data: bytes, subject: str) -> M:
    """Parse ``data`` into a new ``message_type``, or raise DecodeError.

    The wire format is checked strictly first, so a malformed body never
    yields a partly populated message.
    """
    try:
        check_message(message_type, data)
        return message_type().parse(data)
    except Exception as e:
        raise DecodeError(f"failed unmarshalling {message_type.__name__} for {subject}: {e}") from e


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(deadline - time.monotonic(), 0.0)
