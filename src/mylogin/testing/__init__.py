"""Test utilities for mylogin.

WARNING: The helpers in this module are for TESTING ONLY. They produce
predictable keys, which makes the encrypted files trivial to read for
anyone who knows the helper (the key is stored in clear in any case).

Useful for:
- Unit tests needing byte-for-byte reproducible files
- Building fixtures with a given chunk byte order or filler chunks
"""

from __future__ import annotations

import io

from mylogin.parsing import ByteOrder, encode
from mylogin.security import KEY_SIZE, Key

# Every byte below 32, as in keys written by mysql_config_editor
TEST_KEY = Key(bytes(range(1, KEY_SIZE + 1)))

SAMPLE_PLAINTEXT = (
    b"[client]\n"
    b'user = "root"\n'
    b'password = "secret"\n'
    b"[backup]\n"
    b'user = "backup"\n'
    b'host = "db.example.com"\n'
    b"port = 3306\n"
    b"[local]\n"
    b'socket = "/var/run/mysqld/mysqld.sock"\n'
)


class CountingRandom:
    """Deterministic random source: returns 0, 1, 2, ... modulo 256.

    Callable like os.urandom, for Key.generate().

    Example:
        >>> key = Key.generate(CountingRandom(start=200))
    """

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def __call__(self, n: int) -> bytes:
        data = bytes((self._next + i) % 256 for i in range(n))
        self._next = (self._next + n) % 256
        return data

    def __repr__(self) -> str:
        return f"CountingRandom(next={self._next})"


class FailingRandom:
    """Random source that always fails, like an exhausted entropy device."""

    def __call__(self, n: int) -> bytes:
        raise OSError("random source unavailable")


class _MemoryFile:
    """Minimal encodable file."""

    def __init__(self, key: Key, byte_order: ByteOrder, plaintext: bytes) -> None:
        self.key = key
        self.byte_order = byte_order
        self._plaintext = plaintext

    def plain_text(self) -> io.BytesIO:
        return io.BytesIO(self._plaintext)


def build_login_file(
    plaintext: bytes = SAMPLE_PLAINTEXT,
    key: Key = TEST_KEY,
    byte_order: ByteOrder = ByteOrder.LITTLE,
    filler_chunks: int = 0,
) -> bytes:
    """Encrypt plaintext into login file bytes.

    Args:
        plaintext: Option file content
        key: File key
        byte_order: Byte order of chunk lengths
        filler_chunks: Number of zero-length chunks inserted after the
            first chunk

    Returns:
        Complete login file contents
    """
    out = io.BytesIO()
    encode(out, _MemoryFile(key, byte_order, plaintext))
    data = out.getvalue()
    if not filler_chunks:
        return data

    # Insert fillers after the first chunk
    header_size = 4 + KEY_SIZE
    first_size = byte_order.unpack(data[header_size : header_size + 4])
    split = header_size + 4 + first_size
    return data[:split] + byte_order.pack(0) * filler_chunks + data[split:]


__all__ = [
    "SAMPLE_PLAINTEXT",
    "TEST_KEY",
    "CountingRandom",
    "FailingRandom",
    "build_login_file",
]
