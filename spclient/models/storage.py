"""Storage-resolve response message."""

from dataclasses import dataclass
from typing import List

import betterproto


class StorageResolveResult(betterproto.Enum):
    CDN = 0
    STORAGE = 1
    RESTRICTED = 3


@dataclass
class StorageResolveResponse(betterproto.Message):
    result: "StorageResolveResult" = betterproto.enum_field(1)
    cdnurl: List[str] = betterproto.string_field(2)
    fileid: bytes = betterproto.bytes_field(4)
