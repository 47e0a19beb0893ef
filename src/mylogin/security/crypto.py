"""AES-128 block operations used by the login file chunks.

mysql_config_editor encrypts every 16-byte block of a chunk with AES-128 in
CBC mode and an all-zero IV, restarting the chain for each block. Blocks are
therefore independent of each other.

Padding is PKCS#7 style, except that a full extra block of padding is
always added to an already aligned line.
"""

from __future__ import annotations

import os

from Cryptodome.Cipher import AES

BLOCK_SIZE = AES.block_size  # 16
ZERO_IV = bytes(BLOCK_SIZE)


def secure_random_bytes(n: int) -> bytes:
    """Return n cryptographically secure random bytes."""
    return os.urandom(n)


class CipherContext:
    """Encrypts or decrypts block-aligned buffers one block at a time.

    Each block gets its own CBC cipher seeded with a zero IV.
    """

    def __init__(self, key: bytes) -> None:
        """Initialize cipher context.

        Args:
            key: 16-byte AES-128 key (see Key.derive())

        Raises:
            ValueError: If the key is not 16 bytes
        """
        if len(key) != 16:
            raise ValueError(f"AES-128 key must be 16 bytes, got {len(key)}")
        self._key = key

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt block-aligned data."""
        return self._process(data, encrypt=True)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt block-aligned data."""
        return self._process(data, encrypt=False)

    def _process(self, data: bytes, *, encrypt: bool) -> bytes:
        if len(data) % BLOCK_SIZE != 0:
            raise ValueError(
                f"Data length {len(data)} is not a multiple of {BLOCK_SIZE}"
            )
        out = bytearray(len(data))
        for i in range(0, len(data), BLOCK_SIZE):
            cipher = AES.new(self._key, AES.MODE_CBC, iv=ZERO_IV)
            block = data[i : i + BLOCK_SIZE]
            if encrypt:
                out[i : i + BLOCK_SIZE] = cipher.encrypt(block)
            else:
                out[i : i + BLOCK_SIZE] = cipher.decrypt(block)
        return bytes(out)


def padded_length(length: int) -> int:
    """Return the chunk size for a line of the given length.

    Always the next multiple of 16 strictly above length, so between
    1 and 16 bytes of padding are added.
    """
    return ((length + BLOCK_SIZE) // BLOCK_SIZE) * BLOCK_SIZE


def pad_line(line: bytes) -> bytes:
    """Append padding bytes to a plaintext line."""
    n = padded_length(len(line))
    padding_len = n - len(line)
    return line + bytes([padding_len] * padding_len)


def strip_padding(data: bytes) -> bytes:
    """Remove trailing padding from a decrypted chunk.

    Unlike strict PKCS#7, unrecognized padding is not an error: the data
    is returned unchanged.
    """
    if not data:
        return data
    padding_len = data[-1]
    if padding_len == 0 or padding_len > BLOCK_SIZE or padding_len > len(data):
        return data
    if data[-padding_len:] != bytes([padding_len] * padding_len):
        return data
    return data[:-padding_len]
