from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, List

from .binutil import read_u32, stream_size
from .cipher import advance_key
from .constants import (
    KEY_MASK,
    REVISION_V1,
    REVISION_V3,
    TOC_START,
    V1_INITIAL_KEY,
    V3_SEED_INCREMENT,
    V3_SEED_MULTIPLIER,
)
from .errors import CorruptArchive, InvalidArchive


@dataclass(frozen=True)
class Entry:
    name: str       # archive form, backslash separated
    offset: int
    length: int
    key: int


class EntryProvider:
    """Builds the entry table of a validated archive stream.

    Subclasses decode one table-of-contents layout. The stream is positioned
    by the provider itself; callers only rely on the returned list.
    """

    def read_entries(self, f: BinaryIO) -> List[Entry]:
        raise NotImplementedError


def _decode_name(raw: bytes, offset: int) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise CorruptArchive(f"Entry name at offset {offset} is not valid UTF-8") from None


def _read_name(f: BinaryIO, length: int, size: int) -> bytes:
    pos = f.tell()
    if length <= 0 or pos + length > size:
        raise CorruptArchive(f"Entry name length {length} at offset {pos} out of range")
    return f.read(length)


class V1EntryProvider(EntryProvider):
    """RPG Maker XP / VX layout.

    Headers and payloads alternate; every header field is obfuscated with a
    key that advances after each integer and after each name byte. The key
    reached after the size field seeds the payload that follows.
    """

    def __init__(self, initial_key: int = V1_INITIAL_KEY):
        self.initial_key = initial_key & KEY_MASK

    def read_entries(self, f: BinaryIO) -> List[Entry]:
        size = stream_size(f)
        key = self.initial_key
        entries: List[Entry] = []
        f.seek(TOC_START)
        while f.tell() < size:
            name_len = read_u32(f) ^ key
            key = advance_key(key)
            name_pos = f.tell()
            raw = bytearray(_read_name(f, name_len, size))
            for i in range(len(raw)):
                raw[i] ^= key & 0xFF
                key = advance_key(key)
            length = read_u32(f) ^ key
            key = advance_key(key)
            offset = f.tell()
            entries.append(Entry(name=_decode_name(bytes(raw), name_pos), offset=offset, length=length, key=key))
            f.seek(offset + length)
        return entries


class V3EntryProvider(EntryProvider):
    """RPG Maker VX Ace layout.

    A u32 seed follows the revision byte; the table key is ``seed * 9 + 3``
    and stays fixed. Records are (offset, length, key, name length, name)
    and the table ends at a record whose offset decodes to zero.
    """

    def read_entries(self, f: BinaryIO) -> List[Entry]:
        size = stream_size(f)
        f.seek(TOC_START)
        key = (read_u32(f) * V3_SEED_MULTIPLIER + V3_SEED_INCREMENT) & KEY_MASK
        key_bytes = struct.pack("<I", key)
        entries: List[Entry] = []
        while True:
            offset = read_u32(f) ^ key
            if offset == 0:
                break
            length = read_u32(f) ^ key
            entry_key = read_u32(f) ^ key
            name_len = read_u32(f) ^ key
            name_pos = f.tell()
            raw = _read_name(f, name_len, size)
            name = bytes(b ^ key_bytes[i % 4] for i, b in enumerate(raw))
            entries.append(Entry(name=_decode_name(name, name_pos), offset=offset, length=length, key=entry_key))
        return entries


def provider_for_revision(revision: int) -> EntryProvider:
    if revision == REVISION_V1:
        return V1EntryProvider()
    if revision == REVISION_V3:
        return V3EntryProvider()
    raise InvalidArchive(f"Unsupported archive revision: {revision}")
