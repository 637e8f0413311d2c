"""Track metadata messages served by ``/metadata/4/track``."""

from dataclasses import dataclass
from typing import List

import betterproto


class AudioFormat(betterproto.Enum):
    OGG_VORBIS_96 = 0
    OGG_VORBIS_160 = 1
    OGG_VORBIS_320 = 2
    MP3_256 = 3
    MP3_320 = 4
    MP3_160 = 5
    MP3_96 = 6
    MP3_160_ENC = 7
    AAC_24 = 8
    AAC_48 = 9
    FLAC_FLAC = 16


@dataclass
class Artist(betterproto.Message):
    gid: bytes = betterproto.bytes_field(1)
    name: str = betterproto.string_field(2)


@dataclass
class Album(betterproto.Message):
    gid: bytes = betterproto.bytes_field(1)
    name: str = betterproto.string_field(2)
    artist: List["Artist"] = betterproto.message_field(3)
    label: str = betterproto.string_field(5)


@dataclass
class ExternalId(betterproto.Message):
    type: str = betterproto.string_field(1)
    id: str = betterproto.string_field(2)


@dataclass
class AudioFile(betterproto.Message):
    file_id: bytes = betterproto.bytes_field(1)
    format: "AudioFormat" = betterproto.enum_field(2)


@dataclass
class Track(betterproto.Message):
    gid: bytes = betterproto.bytes_field(1)
    name: str = betterproto.string_field(2)
    album: "Album" = betterproto.message_field(3)
    artist: List["Artist"] = betterproto.message_field(4)
    number: int = betterproto.sint32_field(5)
    disc_number: int = betterproto.sint32_field(6)
    duration: int = betterproto.sint32_field(7)
    popularity: int = betterproto.sint32_field(8)
    explicit: bool = betterproto.bool_field(9)
    external_id: List["ExternalId"] = betterproto.message_field(10)
    file: List["AudioFile"] = betterproto.message_field(12)
    alternative: List["Track"] = betterproto.message_field(13)
