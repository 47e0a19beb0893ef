"""Login file chunk decoding and encoding.

This module handles the binary layout of .mylogin.cnf files:
- Header reading (format marker and key)
- Chunk length byte order detection
- Streaming chunk decryption (PlainTextReader)
- Line by line chunk encryption

File structure:
1. 4 bytes, ignored (written as zeros)
2. 20 bytes, the key in clear
3. Chunks until the end of the stream:
   - 4 bytes: signed chunk length L (0 = filler, skipped)
   - L bytes: AES-128 encrypted line with padding, L a multiple of 16

Each chunk written by mysql_config_editor holds exactly one line of the
option file. Multi-byte integers use the byte order of the machine that
wrote the file; it is detected from the first chunk length.
"""

from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Protocol

from mylogin.exceptions import (
    InvalidChunkSizeError,
    LineTooLongError,
    TruncatedChunkError,
    TruncatedHeaderError,
    ZeroKeyError,
)
from mylogin.security import (
    BLOCK_SIZE,
    KEY_SIZE,
    CipherContext,
    Key,
    pad_line,
    strip_padding,
)

logger = logging.getLogger(__name__)

# Format marker preceding the key, not interpreted
MARKER_SIZE = 4
HEADER_SIZE = MARKER_SIZE + KEY_SIZE
LENGTH_SIZE = 4

# mysql_config_editor reads chunks into a buffer of 256 AES blocks
MAX_CHUNK_SIZE = 256 * BLOCK_SIZE

# Longest line that still fits in one chunk with its padding
MAX_LINE_SIZE = MAX_CHUNK_SIZE - 1


class ByteOrder(Enum):
    """Byte order of the chunk length fields (struct format prefix)."""

    LITTLE = "<"
    BIG = ">"

    @property
    def display_name(self) -> str:
        """Human-readable byte order name."""
        return "little-endian" if self is ByteOrder.LITTLE else "big-endian"

    def pack(self, value: int) -> bytes:
        """Encode a signed 32-bit integer."""
        return struct.pack(self.value + "i", value)

    def unpack(self, data: bytes) -> int:
        """Decode a signed 32-bit integer."""
        return struct.unpack(self.value + "i", data)[0]


class PlainTextSource(Protocol):
    """Anything that can be encoded as a login file."""

    @property
    def key(self) -> Key: ...

    @property
    def byte_order(self) -> ByteOrder: ...

    def plain_text(self) -> BinaryIO: ...


def detect_byte_order(length_field: bytes) -> ByteOrder:
    """Guess the byte order from the first chunk length field.

    Chunks are always smaller than 64 KiB, so the two high-order bytes of a
    length are zero. If the first two bytes are zero and the last two are
    not, the field is big-endian; anything else is read as little-endian.
    A filler first chunk (length 0) carries no information and is read as
    little-endian; pass an explicit byte order to decode() for such files.
    """
    if (
        len(length_field) >= LENGTH_SIZE
        and length_field[0] == 0
        and length_field[1] == 0
        and (length_field[2] != 0 or length_field[3] != 0)
    ):
        return ByteOrder.BIG
    return ByteOrder.LITTLE


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read up to n bytes, stopping early only at end of stream."""
    parts = []
    remaining = n
    while remaining > 0:
        data = stream.read(remaining)
        if not data:
            break
        parts.append(data)
        remaining -= len(data)
    return b"".join(parts)


class PlainTextReader(io.RawIOBase):
    """Pull-based reader of the decrypted content of a login file.

    Each refill reads, decrypts and unpads exactly one chunk. The reader is
    single-pass: it consumes the underlying stream.
    """

    def __init__(
        self,
        stream: BinaryIO,
        cipher: CipherContext,
        byte_order: ByteOrder,
        pending: bytes = b"",
    ) -> None:
        """Initialize reader.

        Args:
            stream: Binary stream positioned right after the header
            cipher: Cipher context built from the file key
            byte_order: Byte order of the chunk lengths
            pending: Bytes already consumed from stream while detecting the
                byte order, read again before stream
        """
        super().__init__()
        self._stream = stream
        self._cipher = cipher
        self._byte_order = byte_order
        self._pending = pending
        self._buffer = b""
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, b: bytearray | memoryview) -> int:  # type: ignore[override]
        if len(b) == 0:
            return 0
        while not self._buffer:
            if self._eof or not self._next_chunk():
                self._eof = True
                return 0
        n = min(len(b), len(self._buffer))
        b[:n] = self._buffer[:n]
        self._buffer = self._buffer[n:]
        return n

    def _read(self, n: int) -> bytes:
        if self._pending:
            data = self._pending[:n]
            self._pending = self._pending[n:]
            if len(data) < n:
                data += _read_exact(self._stream, n - len(data))
            return data
        return _read_exact(self._stream, n)

    def _next_chunk(self) -> bool:
        """Load the next non-filler chunk into the buffer.

        Returns:
            False at the end of the stream
        """
        while True:
            field = self._read(LENGTH_SIZE)
            if not field:
                return False
            if len(field) < LENGTH_SIZE:
                raise TruncatedChunkError(LENGTH_SIZE, len(field))
            size = self._byte_order.unpack(field)
            if size != 0:
                break
            logger.debug("Skipping filler chunk")

        if size < 0 or size > MAX_CHUNK_SIZE or size % BLOCK_SIZE != 0:
            raise InvalidChunkSizeError(size)

        encrypted = self._read(size)
        if len(encrypted) != size:
            raise TruncatedChunkError(size, len(encrypted))
        logger.debug("Read chunk of %d bytes", size)

        self._buffer = strip_padding(self._cipher.decrypt(encrypted))
        return True


@dataclass(slots=True)
class DecodedFile:
    """Result of decoding a login file stream.

    The plaintext is decrypted lazily as it is read, and only once.
    """

    key: Key
    byte_order: ByteOrder
    reader: io.BufferedReader

    def plain_text(self) -> BinaryIO:
        """Return the single-pass plaintext stream."""
        return self.reader  # type: ignore[return-value]


def decode(stream: BinaryIO, byte_order: ByteOrder | None = None) -> DecodedFile:
    """Start decoding a login file.

    The header is read immediately; chunks are decrypted as the returned
    file's plaintext is read.

    Args:
        stream: Binary stream at the start of the file
        byte_order: Byte order of chunk lengths; detected from the first
            chunk when None

    Returns:
        DecodedFile bound to the remainder of stream

    Raises:
        TruncatedHeaderError: If the stream is shorter than the header
    """
    header = _read_exact(stream, HEADER_SIZE)
    if len(header) < HEADER_SIZE:
        raise TruncatedHeaderError(HEADER_SIZE, len(header))
    key = Key(header[MARKER_SIZE:])

    # The length of the first chunk is read ahead to guess the byte order
    first_length = _read_exact(stream, LENGTH_SIZE)
    if byte_order is None:
        byte_order = detect_byte_order(first_length)
        logger.debug("Detected %s chunk lengths", byte_order.display_name)

    reader = PlainTextReader(stream, key.cipher(), byte_order, first_length)
    return DecodedFile(
        key=key,
        byte_order=byte_order,
        reader=io.BufferedReader(reader, buffer_size=MAX_CHUNK_SIZE),
    )


def encode(output: BinaryIO, file: PlainTextSource) -> None:
    """Encrypt the plaintext of file and write it as a login file.

    Each line of the plaintext, with its line terminator, becomes one chunk.
    A newline is added to a last line lacking one.

    Args:
        output: Binary stream to write to
        file: Source of key, byte order and plaintext

    Raises:
        ZeroKeyError: If the key is all zeros (nothing is written)
        LineTooLongError: If a line doesn't fit in a chunk
    """
    key = file.key
    if key.is_zero():
        raise ZeroKeyError()
    byte_order = file.byte_order

    output.write(bytes(MARKER_SIZE))
    output.write(key.data)

    cipher = key.cipher()
    for line in file.plain_text():
        if not line.endswith(b"\n"):
            line += b"\n"
        if len(line) > MAX_LINE_SIZE:
            raise LineTooLongError(len(line), MAX_LINE_SIZE)

        chunk = cipher.encrypt(pad_line(line))
        output.write(byte_order.pack(len(chunk)))
        output.write(chunk)
        logger.debug("Wrote chunk of %d bytes", len(chunk))
