"""Strict protobuf wire-format checks for betterproto messages.

betterproto parses leniently: truncated payloads, group markers and wire
types that disagree with the schema can yield partly populated messages.
``check_message`` walks the encoded bytes against the message's field
metadata first, so only well-formed payloads reach ``Message.parse``.
"""

import dataclasses
import typing
from functools import lru_cache

import betterproto

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN_DELIM = 2
WIRE_FIXED32 = 5

MAX_VARINT_BYTES = 10
MAX_DEPTH = 64

_WIRE_TYPE_BY_PROTO_TYPE = {
    betterproto.TYPE_ENUM: WIRE_VARINT,
    betterproto.TYPE_BOOL: WIRE_VARINT,
    betterproto.TYPE_INT32: WIRE_VARINT,
    betterproto.TYPE_INT64: WIRE_VARINT,
    betterproto.TYPE_UINT32: WIRE_VARINT,
    betterproto.TYPE_UINT64: WIRE_VARINT,
    betterproto.TYPE_SINT32: WIRE_VARINT,
    betterproto.TYPE_SINT64: WIRE_VARINT,
    betterproto.TYPE_FLOAT: WIRE_FIXED32,
    betterproto.TYPE_FIXED32: WIRE_FIXED32,
    betterproto.TYPE_SFIXED32: WIRE_FIXED32,
    betterproto.TYPE_DOUBLE: WIRE_FIXED64,
    betterproto.TYPE_FIXED64: WIRE_FIXED64,
    betterproto.TYPE_SFIXED64: WIRE_FIXED64,
    betterproto.TYPE_STRING: WIRE_LEN_DELIM,
    betterproto.TYPE_BYTES: WIRE_LEN_DELIM,
    betterproto.TYPE_MESSAGE: WIRE_LEN_DELIM,
    betterproto.TYPE_MAP: WIRE_LEN_DELIM,
}

_FIXED_SIZE = {WIRE_FIXED64: 8, WIRE_FIXED32: 4}


@dataclasses.dataclass(frozen=True)
class _FieldSpec:
    wire_type: int
    repeated: bool
    message_type: type | None


@lru_cache(maxsize=None)
def _schema(message_type: type) -> dict[int, _FieldSpec]:
    hints = typing.get_type_hints(message_type)
    schema = {}
    for field in dataclasses.fields(message_type):
        meta = field.metadata.get("betterproto")
        if meta is None:
            continue
        hint = hints[field.name]
        repeated = typing.get_origin(hint) is list
        nested = None
        if meta.proto_type == betterproto.TYPE_MESSAGE:
            nested = typing.get_args(hint)[0] if repeated else hint
        schema[meta.number] = _FieldSpec(_WIRE_TYPE_BY_PROTO_TYPE[meta.proto_type], repeated, nested)
    return schema


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for i in range(MAX_VARINT_BYTES):
        if pos >= len(data):
            raise ValueError("truncated varint")
        b = data[pos]
        pos += 1
        result |= (b & 0x7F) << (7 * i)
        if not b & 0x80:
            return result, pos
    raise ValueError("varint longer than 10 bytes")


def _read_value(data: bytes, pos: int, wire_type: int) -> tuple[int, int]:
    """Return the (start, stop) span of one value's payload."""
    if wire_type == WIRE_VARINT:
        start = pos
        _, pos = _read_varint(data, pos)
        return start, pos
    if wire_type == WIRE_LEN_DELIM:
        length, start = _read_varint(data, pos)
        stop = start + length
    elif wire_type in _FIXED_SIZE:
        start, stop = pos, pos + _FIXED_SIZE[wire_type]
    else:
        raise ValueError(f"unsupported wire type {wire_type}")
    if stop > len(data):
        raise ValueError(f"truncated value: need {stop - start} bytes, have {len(data) - start}")
    return start, stop


def _check_packed(data: bytes, wire_type: int) -> None:
    if wire_type == WIRE_VARINT:
        pos = 0
        while pos < len(data):
            _, pos = _read_varint(data, pos)
    elif len(data) % _FIXED_SIZE[wire_type]:
        raise ValueError("packed field length is not a multiple of the element size")


def check_message(message_type: type[betterproto.Message], data: bytes, depth: int = 0) -> None:
    """Raise ValueError unless ``data`` is a well-formed ``message_type``.

    Unknown fields are allowed when they use a valid wire type.
    """
    if depth > MAX_DEPTH:
        raise ValueError("message nesting too deep")

    schema = _schema(message_type)
    pos = 0
    while pos < len(data):
        key, pos = _read_varint(data, pos)
        number, wire_type = key >> 3, key & 0x7
        if number == 0:
            raise ValueError("invalid field number 0")

        start, pos = _read_value(data, pos, wire_type)
        spec = schema.get(number)
        if spec is None:
            continue

        if wire_type == spec.wire_type:
            if spec.message_type is not None:
                check_message(spec.message_type, data[start:pos], depth + 1)
        elif spec.repeated and wire_type == WIRE_LEN_DELIM:
            _check_packed(data[start:pos], spec.wire_type)
        else:
            raise ValueError(
                f"{message_type.__name__} field {number}: wire type {wire_type}, expected {spec.wire_type}"
            )
