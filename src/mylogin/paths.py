"""Location of the default login file."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

# Overrides the default location, as for the MySQL client tools
LOGIN_FILE_ENV = "MYSQL_TEST_LOGIN_FILE"

LOGIN_FILE_NAME = ".mylogin.cnf"


def default_file(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path:
    """Return the path of the default login file.

    - $MYSQL_TEST_LOGIN_FILE if set and not empty
    - Windows: %APPDATA%\\MySQL\\.mylogin.cnf
    - others: ~/.mylogin.cnf

    Args:
        environ: Environment to read (os.environ by default)
        platform: Platform name (sys.platform by default)
    """
    if environ is None:
        environ = os.environ
    if platform is None:
        platform = sys.platform

    override = environ.get(LOGIN_FILE_ENV)
    if override:
        return Path(override)

    if platform == "win32":
        return Path(environ.get("APPDATA", "")) / "MySQL" / LOGIN_FILE_NAME

    home = environ.get("HOME")
    if home:
        return Path(home) / LOGIN_FILE_NAME
    return Path.home() / LOGIN_FILE_NAME
