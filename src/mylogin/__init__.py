"""mylogin - Read and write MySQL login path files (.mylogin.cnf).

mysql_config_editor stores client credentials in an obfuscated file:
each line of an option file is encrypted with AES-128 using a key stored in
the file itself. This library decrypts such files, parses their sections,
merges login paths the way the MySQL clients do, and writes files that
mysql_config_editor can read back.

Example:
    from mylogin import LoginFile, default_file

    login = LoginFile.open(default_file()).sections().merge(["client", "backup"])
    if login is not None:
        print(login.dsn() + "mydb")

    # Create a new file
    f = LoginFile.create(b'[client]\\nuser = "root"\\n')
    f.save("/tmp/mylogin.cnf")
"""

__version__ = "0.1.0"

from .exceptions import (
    FormatError,
    InvalidChunkSizeError,
    LineTooLongError,
    MyLoginError,
    ParseError,
    TruncatedChunkError,
    TruncatedHeaderError,
    UnknownOptionError,
    ValidationError,
    ZeroKeyError,
)
from .loginfile import LoginFile, read_login, read_sections
from .models import DEFAULT_SECTION, Login, Section, Sections
from .parsing import ByteOrder, decode, encode, filter_section, parse
from .paths import LOGIN_FILE_ENV, default_file
from .security import Key

__all__ = [
    # Core classes
    "ByteOrder",
    "Key",
    "Login",
    "LoginFile",
    "Section",
    "Sections",
    "DEFAULT_SECTION",
    # Codec and parser
    "decode",
    "encode",
    "filter_section",
    "parse",
    "read_login",
    "read_sections",
    # Paths
    "LOGIN_FILE_ENV",
    "default_file",
    # Exceptions
    "MyLoginError",
    "FormatError",
    "TruncatedHeaderError",
    "InvalidChunkSizeError",
    "TruncatedChunkError",
    "ParseError",
    "UnknownOptionError",
    "ValidationError",
    "ZeroKeyError",
    "LineTooLongError",
]
