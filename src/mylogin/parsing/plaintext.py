"""Parser for the decrypted content of a login file.

The plaintext is a restricted option file as written by mysql_config_editor:

    [client]
    user = "root"
    password = "secret"
    [backup]
    host = "db.example.com"
    port = 3306

Lines before the first section header are ignored. Inside a section each
non-blank line is an `option = value` pair, split on the first " = ".
"""

from __future__ import annotations

import logging
import re
from typing import BinaryIO

from mylogin.exceptions import ParseError, UnknownOptionError
from mylogin.models import Section, Sections

logger = logging.getLogger(__name__)

SEPARATOR = " = "

# Generic escapes of MySQL option files
_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "\\": "\\",
    "s": " ",
}
_ESCAPE_RE = re.compile(r"\\([btnrs\\])")
_QUOTED_ESCAPE_RE = re.compile(r'\\(["\\])')


def unescape(value: str) -> str:
    """Replace \\b, \\t, \\n, \\r, \\\\ and \\s escapes, left to right."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], value)


def parse_value(raw: str) -> str:
    """Decode the raw text of an option value.

    A value in double quotes loses its quotes, and only \\" and \\\\ are
    unescaped inside them. An unquoted value has \\\\ collapsed first.
    The generic escapes are applied last in both cases.
    """
    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        value = _QUOTED_ESCAPE_RE.sub(r"\1", raw[1:-1])
    else:
        value = raw.replace("\\\\", "\\")
    return unescape(value)


def parse(stream: BinaryIO) -> Sections:
    """Parse the plaintext of a login file.

    Args:
        stream: Binary stream of plaintext, e.g. LoginFile.plain_text()

    Returns:
        Sections in file order

    Raises:
        UnknownOptionError: If a section sets an unsupported option
        ParseError: If a line is malformed or not valid UTF-8
    """
    sections = Sections()
    current: Section | None = None

    for line_number, raw_line in enumerate(stream, start=1):
        try:
            line = raw_line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid UTF-8 at line {line_number}") from e
        line = line.rstrip("\n").rstrip("\r")
        if not line:
            continue

        if line[0] == "[":
            end = line.find("]", 1)
            if end == -1:
                raise ParseError(f"Malformed section header at line {line_number}")
            # Text after the closing bracket is ignored
            current = Section(name=line[1:end])
            sections.append(current)
            logger.debug("Found section [%s]", current.name)
            continue

        if current is None:
            continue

        option, sep, raw_value = line.partition(SEPARATOR)
        if not sep:
            raise ParseError(f"Missing '{SEPARATOR.strip()}' at line {line_number}")
        if not current.login.set_option(option, parse_value(raw_value)):
            raise UnknownOptionError(option, line_number)

    return sections
