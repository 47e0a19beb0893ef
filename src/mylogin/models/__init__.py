"""Data models for login file content.

This module provides typed Python classes for the decrypted content of a
login file: logins (connection options) and the sections holding them.
"""

from .login import OPTION_NAMES, Login
from .section import DEFAULT_SECTION, Section, Sections

__all__ = [
    "DEFAULT_SECTION",
    "OPTION_NAMES",
    "Login",
    "Section",
    "Sections",
]
