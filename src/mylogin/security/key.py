"""Login file key handling.

A login file carries its own 20-byte key in clear right after the 4-byte
header. The AES-128 key is obtained by XOR-folding the 20 bytes onto
16 positions: byte i of the file key is XORed into position i % 16.

Keys produced by mysql_config_editor always have the 3 high bits of each
byte cleared. Key.generate() reproduces that.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .crypto import CipherContext, secure_random_bytes

logger = logging.getLogger(__name__)

KEY_SIZE = 20
CIPHER_KEY_SIZE = 16

# Only the low 5 bits of each generated key byte are kept
KEY_BYTE_MASK = 0x1F


@dataclass(frozen=True, slots=True)
class Key:
    """Raw key stored in a login file.

    Attributes:
        data: The 20 key bytes, as found in the file
    """

    data: bytes

    def __post_init__(self) -> None:
        """Validate key length."""
        if len(self.data) != KEY_SIZE:
            raise ValueError(f"Key must be {KEY_SIZE} bytes, got {len(self.data)}")

    @classmethod
    def zero(cls) -> Key:
        """Return the all-zero (uninitialized) key."""
        return cls(bytes(KEY_SIZE))

    @classmethod
    def generate(
        cls, read_random: Callable[[int], bytes] = secure_random_bytes
    ) -> Key:
        """Create a new key from a source of random bytes.

        The high 3 bits of every byte are cleared, so each byte is in
        [0, 31]. An all-zero result is possible but has probability 2**-100.

        Args:
            read_random: Callable returning the requested number of random
                bytes (os.urandom, secrets.token_bytes, ...)

        Returns:
            The new Key

        Raises:
            Whatever read_random raises; ValueError if it returns the
            wrong number of bytes
        """
        raw = read_random(KEY_SIZE)
        key = cls(bytes(b & KEY_BYTE_MASK for b in raw))
        logger.debug("Generated new login file key")
        return key

    def is_zero(self) -> bool:
        """Check whether every key byte is zero."""
        return not any(self.data)

    def derive(self) -> bytes:
        """Fold the 20 key bytes into a 16-byte AES-128 key."""
        folded = bytearray(CIPHER_KEY_SIZE)
        for i, b in enumerate(self.data):
            folded[i % CIPHER_KEY_SIZE] ^= b
        return bytes(folded)

    def cipher(self) -> CipherContext:
        """Return a fresh cipher context for this key."""
        return CipherContext(self.derive())

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        """Return string representation (hides key bytes)."""
        if self.is_zero():
            return "Key(<zero>)"
        return f"Key(<{len(self.data)} bytes>)"
