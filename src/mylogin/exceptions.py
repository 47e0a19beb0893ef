"""Custom exception hierarchy for mylogin.

All exceptions raised by the codec and the parser inherit from MyLoginError.
Plain I/O failures of the underlying stream are not wrapped: they surface as
the OSError raised by the stream itself.

Exception Hierarchy:
    MyLoginError (base)
    ├── FormatError
    │   ├── TruncatedHeaderError
    │   ├── InvalidChunkSizeError
    │   └── TruncatedChunkError
    ├── ParseError
    │   └── UnknownOptionError
    └── ValidationError
        ├── ZeroKeyError
        └── LineTooLongError

Security Note:
    Messages never include key material, passwords or decrypted text.
"""

from __future__ import annotations


class MyLoginError(Exception):
    """Base exception for all mylogin errors.

    All exceptions raised by mylogin inherit from this class,
    making it easy to catch all library-specific errors.
    """


# --- Format Errors ---


class FormatError(MyLoginError):
    """Error in the binary layout of a login file.

    Raised when the bytes don't follow the .mylogin.cnf chunk format.
    """


class TruncatedHeaderError(FormatError):
    """The file is shorter than its fixed 24-byte header."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Truncated header: expected {expected} bytes, got {actual}"
        )


class InvalidChunkSizeError(FormatError):
    """A chunk length field is negative, too large or not block aligned."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Invalid chunk size: {size}")


class TruncatedChunkError(FormatError):
    """The stream ended inside a chunk length field or chunk payload."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Truncated chunk: expected {expected} bytes, got {actual}"
        )


# --- Parse Errors ---


class ParseError(MyLoginError):
    """The decrypted plaintext is not a valid option file.

    Parsing is all-or-nothing: no partial section list survives this error.
    """


class UnknownOptionError(ParseError):
    """A section contains an option other than user/password/host/port/socket."""

    def __init__(self, option: str, line_number: int | None = None) -> None:
        self.option = option
        self.line_number = line_number
        message = f"Unknown option '{option}'"
        if line_number is not None:
            message += f" at line {line_number}"
        super().__init__(message)


# --- Validation Errors ---


class ValidationError(MyLoginError):
    """Caller supplied data that cannot be encoded."""


class ZeroKeyError(ValidationError):
    """Encoding was requested with an all-zero (uninitialized) key."""

    def __init__(self) -> None:
        super().__init__("Key is not initialized")


class LineTooLongError(ValidationError):
    """A plaintext line does not fit in a single chunk."""

    def __init__(self, length: int, maximum: int) -> None:
        self.length = length
        self.maximum = maximum
        super().__init__(
            f"Plaintext line of {length} bytes exceeds the maximum of {maximum} bytes"
        )
