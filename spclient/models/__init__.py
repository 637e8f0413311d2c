"""Protobuf messages exchanged with the spclient service."""

from spclient.models.connectstate import (
    Device,
    DeviceInfo,
    DeviceType,
    MemberType,
    PlayerState,
    ProvidedTrack,
    PutStateReason,
    PutStateRequest,
)
from spclient.models.metadata import Album, Artist, AudioFile, AudioFormat, ExternalId, Track
from spclient.models.storage import StorageResolveResponse, StorageResolveResult

__all__ = [
    "Album",
    "Artist",
    "AudioFile",
    "AudioFormat",
    "Device",
    "DeviceInfo",
    "DeviceType",
    "ExternalId",
    "MemberType",
    "PlayerState",
    "ProvidedTrack",
    "PutStateReason",
    "PutStateRequest",
    "StorageResolveResponse",
    "StorageResolveResult",
    "Track",
]
