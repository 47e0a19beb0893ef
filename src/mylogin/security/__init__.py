"""Security-critical components for mylogin.

This module contains the key handling and block cipher code:
- Login file keys and AES-128 key derivation
- Per-block AES operations and the padding scheme

All code in this module should be audited carefully.
"""

from .crypto import (
    BLOCK_SIZE,
    CipherContext,
    pad_line,
    padded_length,
    secure_random_bytes,
    strip_padding,
)
from .key import CIPHER_KEY_SIZE, KEY_SIZE, Key

__all__ = [
    # Crypto
    "BLOCK_SIZE",
    "CipherContext",
    "pad_line",
    "padded_length",
    "secure_random_bytes",
    "strip_padding",
    # Key
    "CIPHER_KEY_SIZE",
    "KEY_SIZE",
    "Key",
]
