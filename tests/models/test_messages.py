"""Tests for spclient protobuf messages."""

from spclient.models import (
    Album,
    Artist,
    Device,
    DeviceInfo,
    DeviceType,
    MemberType,
    PlayerState,
    ProvidedTrack,
    PutStateReason,
    PutStateRequest,
    StorageResolveResponse,
    StorageResolveResult,
    Track,
)


class TestPutStateRequest:
    """Tests for PutStateRequest."""

    def test_default_request_encodes_empty(self):
        """A request with only defaults should serialize to nothing."""
        assert bytes(PutStateRequest()) == b""

    def test_nested_state_survives_parse(self):
        """Nested device and player state should parse back."""
        request = PutStateRequest(
            device=Device(
                device_info=DeviceInfo(
                    can_play=True,
                    volume=32768,
                    name="living room",
                    device_type=DeviceType.SPEAKER,
                    device_id="abc123",
                ),
                player_state=PlayerState(
                    context_uri="spotify:playlist:37i9dQZF1DXcBWIGoYBM5M",
                    track=ProvidedTrack(uri="spotify:track:6rqhFgbbKwnb9MLmUQDhG6", provider="context"),
                    is_playing=True,
                ),
            ),
            member_type=MemberType.CONNECT_STATE,
            put_state_reason=PutStateReason.NEW_DEVICE,
            client_side_timestamp=1700000000123,
        )
        parsed = PutStateRequest().parse(bytes(request))
        assert parsed.device.device_info.name == "living room"
        assert parsed.device.device_info.volume == 32768
        assert parsed.device.player_state.track.uri == "spotify:track:6rqhFgbbKwnb9MLmUQDhG6"
        assert parsed.put_state_reason == PutStateReason.NEW_DEVICE
        assert parsed.client_side_timestamp == 1700000000123


class TestStorageResolveResponse:
    """Tests for StorageResolveResponse."""

    def test_restricted_without_urls(self):
        """A restricted result carries no CDN urls."""
        data = bytes(StorageResolveResponse(result=StorageResolveResult.RESTRICTED))
        parsed = StorageResolveResponse().parse(data)
        assert parsed.result == StorageResolveResult.RESTRICTED
        assert parsed.cdnurl == []


class TestTrack:
    """Tests for Track."""

    def test_album_and_artists_parse(self):
        """Album and repeated artists should parse back in order."""
        track = Track(
            name="Song",
            album=Album(name="Album", artist=[Artist(name="Band")]),
            artist=[Artist(name="Singer"), Artist(name="Featured")],
            explicit=True,
        )
        parsed = Track().parse(bytes(track))
        assert parsed.album.name == "Album"
        assert [a.name for a in parsed.artist] == ["Singer", "Featured"]
        assert parsed.album.artist[0].name == "Band"
        assert parsed.explicit is True
