"""High-level API for .mylogin.cnf files.

This module provides the main interface for working with login files:
- Opening and decrypting existing files
- Creating new files from option text
- Reading sections and merged logins
- Saving files
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from .models import DEFAULT_SECTION, Login, Sections
from .parsing import ByteOrder, decode, encode, parse
from .security import Key

logger = logging.getLogger(__name__)

# mysql_config_editor creates the file readable by its owner only
LOGIN_FILE_MODE = 0o600


class LoginFile:
    """A login file: its key, chunk byte order and plaintext.

    Files returned by open(), open_bytes() and create() hold their
    plaintext in memory, so plain_text() can be called any number of times.
    A LoginFile wrapping a stream (from_stream()) decrypts on the fly and
    its plaintext can be read only once.

    Example usage:
        # Read the merged options of two login paths
        login = LoginFile.open("~/.mylogin.cnf").sections().merge(
            ["client", "backup"]
        )

        # Create a new file
        f = LoginFile.create(b"[client]\\nuser = root\\n")
        f.save("/tmp/test.cnf")
    """

    def __init__(
        self,
        key: Key,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        plaintext: bytes | None = None,
        stream: BinaryIO | None = None,
    ) -> None:
        """Initialize login file.

        Usually you should use LoginFile.open() or LoginFile.create() instead.

        Args:
            key: File key
            byte_order: Byte order of chunk lengths
            plaintext: Decrypted content held in memory
            stream: Single-pass plaintext stream, used if plaintext is None
        """
        if plaintext is None and stream is None:
            plaintext = b""
        self._key = key
        self._byte_order = byte_order
        self._plaintext = plaintext
        self._stream = stream
        self._filepath: Path | None = None

    @property
    def key(self) -> Key:
        """Get the file key."""
        return self._key

    @property
    def byte_order(self) -> ByteOrder:
        """Get the byte order of chunk lengths."""
        return self._byte_order

    @property
    def filepath(self) -> Path | None:
        """Get the file path (if opened from or saved to a file)."""
        return self._filepath

    def plain_text(self) -> BinaryIO:
        """Return a binary stream of the decrypted content."""
        if self._plaintext is not None:
            return io.BytesIO(self._plaintext)
        assert self._stream is not None
        return self._stream

    def sections(self) -> Sections:
        """Parse the decrypted content.

        Raises:
            ParseError: If the content is not a valid option file
        """
        return parse(self.plain_text())

    def login(self, names: Iterable[str] = (DEFAULT_SECTION,)) -> Login | None:
        """Merge the named sections (see Sections.merge())."""
        return self.sections().merge(names)

    # --- Opening files ---

    @classmethod
    def open(
        cls,
        filepath: str | Path,
        byte_order: ByteOrder | None = None,
    ) -> LoginFile:
        """Open and decrypt an existing login file.

        Args:
            filepath: Path to the file ("~" is expanded)
            byte_order: Byte order of chunk lengths; detected when None

        Returns:
            LoginFile instance

        Raises:
            FileNotFoundError: If file doesn't exist
            FormatError: If the file is truncated or corrupted
        """
        filepath = Path(filepath).expanduser()
        with filepath.open("rb") as f:
            login_file = cls.from_stream(f, byte_order=byte_order).buffered()
        login_file._filepath = filepath
        logger.debug("Opened login file %s", filepath)
        return login_file

    @classmethod
    def open_bytes(
        cls,
        data: bytes,
        byte_order: ByteOrder | None = None,
    ) -> LoginFile:
        """Decrypt a login file from bytes.

        Args:
            data: Login file contents
            byte_order: Byte order of chunk lengths; detected when None

        Returns:
            LoginFile instance
        """
        return cls.from_stream(io.BytesIO(data), byte_order=byte_order).buffered()

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        byte_order: ByteOrder | None = None,
    ) -> LoginFile:
        """Wrap a login file stream, decrypting lazily.

        The header is read now; the caller keeps ownership of stream and
        must keep it open while the plaintext is read.

        Raises:
            TruncatedHeaderError: If the stream is shorter than the header
        """
        decoded = decode(stream, byte_order=byte_order)
        return cls(
            key=decoded.key,
            byte_order=decoded.byte_order,
            stream=decoded.plain_text(),
        )

    def buffered(self) -> LoginFile:
        """Return this file with its whole plaintext decrypted in memory."""
        if self._plaintext is not None:
            return self
        login_file = LoginFile(
            key=self._key,
            byte_order=self._byte_order,
            plaintext=self.plain_text().read(),
        )
        login_file._filepath = self._filepath
        return login_file

    # --- Creating files ---

    @classmethod
    def create(
        cls,
        plaintext: bytes | str = b"",
        key: Key | None = None,
        byte_order: ByteOrder = ByteOrder.LITTLE,
    ) -> LoginFile:
        """Create a new login file from option text.

        Args:
            plaintext: Option file content
            key: File key (a new random key is generated when None)
            byte_order: Byte order of chunk lengths

        Returns:
            New LoginFile instance
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        if key is None:
            key = Key.generate()
        return cls(key=key, byte_order=byte_order, plaintext=plaintext)

    # --- Saving files ---

    def to_bytes(self) -> bytes:
        """Encrypt the file.

        Raises:
            ZeroKeyError: If the key is all zeros
            LineTooLongError: If a plaintext line doesn't fit in a chunk
        """
        out = io.BytesIO()
        encode(out, self)
        return out.getvalue()

    def save(self, filepath: str | Path | None = None) -> None:
        """Encrypt and write the file, readable by its owner only.

        Args:
            filepath: Destination (defaults to the path the file was opened
                from)

        Raises:
            ValueError: If no path is given and the file has none
        """
        if filepath is None:
            if self._filepath is None:
                raise ValueError("No filepath specified")
            filepath = self._filepath
        filepath = Path(filepath).expanduser()

        # Encode fully before touching the destination
        data = self.to_bytes()
        fd = os.open(filepath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, LOGIN_FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            # The mode of os.open only applies to newly created files
            if os.chmod in os.supports_fd:
                os.chmod(f.fileno(), LOGIN_FILE_MODE)
            f.write(data)
        self._filepath = filepath
        logger.debug("Saved login file %s", filepath)

    def __repr__(self) -> str:
        """Return string representation (hides key and content)."""
        return f"LoginFile(byte_order={self._byte_order.name}, filepath={self._filepath})"


def read_sections(filepath: str | Path) -> Sections:
    """Read all sections of a login file."""
    return LoginFile.open(filepath).sections()


def read_login(filepath: str | Path, names: Iterable[str]) -> Login | None:
    """Read a login file and merge the named sections.

    Returns:
        The merged Login, or None if none of the sections sets an option
    """
    return read_sections(filepath).merge(names)
