"""Wire helpers shared by the transfer client and server."""

from __future__ import annotations

import struct
from datetime import datetime

MAXLINE = 4096
INT_SIZE = 4
MAX_MTU = 32000

_INT = struct.Struct("<i")


class ProtocolError(Exception):
    """Raised when the peer misbehaves or the transfer cannot continue."""


def format_timestamp(moment: datetime) -> str:
    """Render a log timestamp such as ``2024-01-02T03:04.05z``."""
    text = moment.strftime("%Y-%m-%dT%H:%M:%Sz")
    head, sep, tail = text.rpartition(":")
    return f"{head}.{tail}" if sep else text


def pack_int(value: int) -> bytes:
    """Encode a signed 32-bit integer for the wire."""
    try:
        return _INT.pack(value)
    except struct.error as exc:
        raise ProtocolError(f"value out of range: {value}") from exc


def unpack_int(data: bytes) -> int:
    """Decode a signed 32-bit integer received from the wire."""
    if len(data) != INT_SIZE:
        raise ProtocolError(f"expected {INT_SIZE} bytes, got {len(data)}")
    return _INT.unpack(data)[0]


def split_chunks(data: bytes, mtu: int) -> list[bytes]:
    """Split ``data`` into consecutive pieces of at most ``mtu`` bytes."""
    if mtu < 1:
        raise ValueError("MTU must be positive")
    return [data[start:start + mtu] for start in range(0, len(data), mtu)]