"""Rolling XOR keystream used for RGSSAD entry payloads.

Each 4-byte group of data is XORed with the little-endian bytes of a running
32-bit key. The key starts at the entry's seed and is advanced with
``key * 7 + 3`` (mod 2**32) between groups, never before the first one.
XOR makes the transform its own inverse, so ``encrypt`` and ``decrypt`` are
the same operation.
"""

from __future__ import annotations

import struct

from Cryptodome.Util.strxor import strxor

from .constants import KEY_INCREMENT, KEY_MASK, KEY_MULTIPLIER


_KEY_STRUCT = struct.Struct("<I")


def advance_key(key: int) -> int:
    return (key * KEY_MULTIPLIER + KEY_INCREMENT) & KEY_MASK


class KeystreamCipher:
    """Cipher state for one entry.

    ``process`` may be called repeatedly with consecutive slices of the same
    payload; the output equals a single call over the concatenation.
    """

    def __init__(self, seed_key: int):
        self.key = seed_key & KEY_MASK
        # bytes of the current window already consumed (0..4)
        self.pos = 0

    def keystream(self, length: int) -> bytes:
        stream = bytearray(_KEY_STRUCT.pack(self.key)[self.pos:])
        key = self.key
        while len(stream) < length:
            key = advance_key(key)
            stream += _KEY_STRUCT.pack(key)
        self.key = key
        self.pos = 4 - (len(stream) - length)
        return bytes(stream[:length])

    def process(self, data: bytes) -> bytes:
        if not data:
            return b""
        return strxor(bytes(data), self.keystream(len(data)))


def decrypt(data: bytes, seed_key: int) -> bytes:
    return KeystreamCipher(seed_key).process(data)


encrypt = decrypt
