"""Connect-state messages published to ``/connect-state/v1/devices``."""

from dataclasses import dataclass
from typing import Dict

import betterproto


class PutStateReason(betterproto.Enum):
    UNKNOWN_PUT_STATE_REASON = 0
    SPIRC_HELLO = 1
    SPIRC_NOTIFY = 2
    NEW_DEVICE = 3
    PLAYER_STATE_CHANGED = 4
    VOLUME_CHANGED = 5
    PICKER_OPENED = 6
    BECAME_INACTIVE = 7
    ALIAS_CHANGED = 8


class MemberType(betterproto.Enum):
    SPIRC_V2 = 0
    SPIRC_V3 = 1
    CONNECT_STATE = 2
    CONNECT_STATE_EXTENDED = 5
    ACTIVE_DEVICE_TRACKER = 6
    PLAY_TOKEN = 7


class DeviceType(betterproto.Enum):
    UNKNOWN = 0
    COMPUTER = 1
    TABLET = 2
    SMARTPHONE = 3
    SPEAKER = 4
    TV = 5
    AVR = 6
    STB = 7
    AUDIO_DONGLE = 8
    GAME_CONSOLE = 9
    CAST_VIDEO = 10
    CAST_AUDIO = 11
    AUTOMOBILE = 12
    SMARTWATCH = 13
    CHROMEBOOK = 14


@dataclass
class ProvidedTrack(betterproto.Message):
    uri: str = betterproto.string_field(1)
    uid: str = betterproto.string_field(2)
    metadata: Dict[str, str] = betterproto.map_field(3, betterproto.TYPE_STRING, betterproto.TYPE_STRING)
    provider: str = betterproto.string_field(5)


@dataclass
class PlayerState(betterproto.Message):
    timestamp: int = betterproto.int64_field(1)
    context_uri: str = betterproto.string_field(2)
    context_url: str = betterproto.string_field(3)
    track: "ProvidedTrack" = betterproto.message_field(7)
    playback_id: str = betterproto.string_field(8)
    playback_speed: float = betterproto.double_field(9)
    position_as_of_timestamp: int = betterproto.int64_field(10)
    duration: int = betterproto.int64_field(11)
    is_playing: bool = betterproto.bool_field(12)
    is_paused: bool = betterproto.bool_field(13)
    is_buffering: bool = betterproto.bool_field(14)
    is_system_initiated: bool = betterproto.bool_field(15)
    session_id: str = betterproto.string_field(23)
    queue_revision: str = betterproto.string_field(24)


@dataclass
class DeviceInfo(betterproto.Message):
    can_play: bool = betterproto.bool_field(1)
    volume: int = betterproto.uint32_field(2)
    name: str = betterproto.string_field(3)
    device_software_version: str = betterproto.string_field(6)
    device_type: "DeviceType" = betterproto.enum_field(7)
    spirc_version: str = betterproto.string_field(9)
    device_id: str = betterproto.string_field(10)
    is_private_session: bool = betterproto.bool_field(11)
    client_id: str = betterproto.string_field(13)
    brand: str = betterproto.string_field(14)
    model: str = betterproto.string_field(15)


@dataclass
class Device(betterproto.Message):
    device_info: "DeviceInfo" = betterproto.message_field(1)
    player_state: "PlayerState" = betterproto.message_field(2)


@dataclass
class PutStateRequest(betterproto.Message):
    callback_url: str = betterproto.string_field(1)
    device: "Device" = betterproto.message_field(2)
    member_type: "MemberType" = betterproto.enum_field(3)
    is_active: bool = betterproto.bool_field(4)
    put_state_reason: "PutStateReason" = betterproto.enum_field(5)
    message_id: int = betterproto.uint32_field(6)
    last_command_sent_by_device_id: str = betterproto.string_field(7)
    last_command_message_id: int = betterproto.uint32_field(8)
    started_playing_at: int = betterproto.uint64_field(9)
    has_been_playing_for_ms: int = betterproto.uint64_field(11)
    client_side_timestamp: int = betterproto.uint64_field(12)
    only_write_player_state: bool = betterproto.bool_field(13)
