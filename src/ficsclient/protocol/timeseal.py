"""Timeseal framing for outbound commands.

The server expects every command scrambled with a timestamp and a fixed
key; inbound text is sent in the clear.
"""

from __future__ import annotations

import time

TIMESEAL_KEY = b"Timestamp (FICS) v1.0 - programmed by Henrik Gram."
TIMESEAL_HELLO = "TIMESEAL2|freeseal|icsgo|"
BLOCK_SIZE = 12

_SWAPS = ((0, 11), (2, 9), (4, 7))


def _timestamp(epoch_ms: int) -> bytes:
    seconds, millis = divmod(epoch_ms, 1000)
    return str((seconds % 10000) * 1000 + millis).encode("ascii")


def encode(command: str, timestamp_ms: int | None = None) -> bytes:
    """Frame *command* for the wire.

    *timestamp_ms* is milliseconds since the epoch; the current time is used
    when omitted.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000

    buf = bytearray(command.encode("latin-1", errors="replace"))
    buf += b"\x18" + _timestamp(timestamp_ms) + b"\x19"
    while len(buf) % BLOCK_SIZE:
        buf.append(0x31)

    for start in range(0, len(buf), BLOCK_SIZE):
        for a, b in _SWAPS:
            buf[start + a], buf[start + b] = buf[start + b], buf[start + a]

    for n, byte in enumerate(buf):
        buf[n] = ((byte | 0x80) ^ TIMESEAL_KEY[n % len(TIMESEAL_KEY)]) - 32

    buf += b"\x80\n"
    return bytes(buf)


def decode(data: bytes) -> str:
    """Inbound bytes are plain single-byte text."""
    return data.decode("latin-1")


def hello_frame(greeting: str = TIMESEAL_HELLO, timestamp_ms: int | None = None) -> bytes:
    """First frame of a connection, announcing the timeseal client."""
    return encode(greeting, timestamp_ms)
