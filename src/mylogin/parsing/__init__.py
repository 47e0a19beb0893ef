"""Login file format parsing and building.

This module handles the low-level operations:
- Chunk decryption and encryption of the binary file
- Parsing of the decrypted option file text
- Raw extraction of a single section

All binary operations use Python's struct module.
"""

from .chunks import (
    HEADER_SIZE,
    MAX_CHUNK_SIZE,
    MAX_LINE_SIZE,
    ByteOrder,
    DecodedFile,
    PlainTextReader,
    PlainTextSource,
    decode,
    detect_byte_order,
    encode,
)
from .filter import SectionFilter, filter_section
from .plaintext import parse, parse_value, unescape

__all__ = [
    # Chunks
    "HEADER_SIZE",
    "MAX_CHUNK_SIZE",
    "MAX_LINE_SIZE",
    "ByteOrder",
    "DecodedFile",
    "PlainTextReader",
    "PlainTextSource",
    "decode",
    "detect_byte_order",
    "encode",
    # Filter
    "SectionFilter",
    "filter_section",
    # Plaintext
    "parse",
    "parse_value",
    "unescape",
]
