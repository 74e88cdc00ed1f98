from __future__ import annotations

import struct
from typing import BinaryIO

from .errors import MalformedStream


_U32 = struct.Struct("<I")


def read_bounded_string(f: BinaryIO, max_length: int) -> str:
    """Read a NUL-terminated string of at most ``max_length`` bytes.

    The cursor is left just past the NUL when one is found inside the window,
    otherwise just past the ``max_length``-th byte. Bytes are decoded as
    Latin-1.

    Raises:
        MalformedStream: end of stream reached before a NUL or the cap.
    """
    begin = f.tell()
    raw = f.read(max_length)
    nul = raw.find(b"\x00")
    if nul >= 0:
        f.seek(begin + nul + 1)
        return raw[:nul].decode("latin-1")
    if len(raw) < max_length:
        f.seek(begin)
        raise MalformedStream(f"Unexpected end of stream reading string at offset {begin}")
    return raw.decode("latin-1")


def read_u32(f: BinaryIO) -> int:
    raw = f.read(_U32.size)
    if len(raw) != _U32.size:
        raise MalformedStream("Unexpected end of stream reading u32")
    return _U32.unpack(raw)[0]


def stream_size(f: BinaryIO) -> int:
    pos = f.tell()
    size = f.seek(0, 2)
    f.seek(pos)
    return size
