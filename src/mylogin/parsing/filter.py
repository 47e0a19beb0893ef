"""Raw section extraction from option file text."""

from __future__ import annotations

import io
from typing import BinaryIO


class SectionFilter(io.RawIOBase):
    """Stream keeping only the lines of one section of an option file.

    A section header line toggles whether the following lines are kept:
    they are kept only after a header equal to [name]. Every kept line is
    written with a "\\n" terminator.
    """

    def __init__(self, source: BinaryIO, name: str) -> None:
        super().__init__()
        self._source = source
        self._header = b"[" + name.encode("utf-8") + b"]"
        self._show = False
        self._buffer = b""

    def readable(self) -> bool:
        return True

    def readinto(self, b: bytearray | memoryview) -> int:  # type: ignore[override]
        if len(b) == 0:
            return 0
        while not self._buffer:
            raw_line = self._source.readline()
            if not raw_line:
                return 0
            line = raw_line.rstrip(b"\n").rstrip(b"\r")
            if line.startswith(b"["):
                self._show = line == self._header
            if self._show:
                self._buffer = line + b"\n"
        n = min(len(b), len(self._buffer))
        b[:n] = self._buffer[:n]
        self._buffer = self._buffer[n:]
        return n


def filter_section(source: BinaryIO, name: str) -> BinaryIO:
    """Return a stream of the raw lines of section name, header included.

    Args:
        source: Binary plaintext stream
        name: Section name, without brackets

    Returns:
        Buffered binary stream
    """
    return io.BufferedReader(SectionFilter(source, name))  # type: ignore[return-value]
