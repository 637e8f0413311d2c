"""Spotify track identifiers."""

from dataclasses import dataclass

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ID_SIZE = 16
BASE62_LENGTH = 22
TRACK_URI_PREFIX = "spotify:track:"


@dataclass(frozen=True)
class TrackId:
    """A 16-byte track id (the ``gid`` of metadata messages).

    Track ids appear in three spellings: 32 hex characters in metadata URLs,
    22 base62 characters in URIs, and raw bytes inside protobuf messages.
    """

    gid: bytes

    def __post_init__(self) -> None:
        if len(self.gid) != ID_SIZE:
            raise ValueError(f"track id must be {ID_SIZE} bytes, got {len(self.gid)}")

    @classmethod
    def from_hex(cls, value: str) -> "TrackId":
        if len(value) != ID_SIZE * 2:
            raise ValueError(f"invalid hex track id: {value!r}")
        return cls(bytes.fromhex(value))

    @classmethod
    def from_base62(cls, value: str) -> "TrackId":
        if len(value) != BASE62_LENGTH:
            raise ValueError(f"invalid base62 track id: {value!r}")
        n = 0
        for char in value:
            digit = BASE62_ALPHABET.find(char)
            if digit < 0:
                raise ValueError(f"invalid base62 track id: {value!r}")
            n = n * 62 + digit
        if n >= 1 << (ID_SIZE * 8):
            raise ValueError(f"base62 track id out of range: {value!r}")
        return cls(n.to_bytes(ID_SIZE, "big"))

    @classmethod
    def from_uri(cls, uri: str) -> "TrackId":
        if not uri.startswith(TRACK_URI_PREFIX):
            raise ValueError(f"not a track uri: {uri!r}")
        return cls.from_base62(uri[len(TRACK_URI_PREFIX) :])

    def hex(self) -> str:
        return self.gid.hex()

    def base62(self) -> str:
        n = int.from_bytes(self.gid, "big")
        chars = []
        for _ in range(BASE62_LENGTH):
            n, digit = divmod(n, 62)
            chars.append(BASE62_ALPHABET[digit])
        return "".join(reversed(chars))

    def uri(self) -> str:
        return TRACK_URI_PREFIX + self.base62()

    def __str__(self) -> str:
        return self.uri()
