"""Section model for the structured content of a login file."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .login import Login

logger = logging.getLogger(__name__)

# Name of the base section read by all MySQL client tools
DEFAULT_SECTION = "client"


@dataclass
class Section:
    """A named login path of a login file.

    Attributes:
        name: Text between the brackets of the section header
        login: Options set in this section
    """

    name: str
    login: Login = field(default_factory=Login)


@dataclass
class Sections:
    """Ordered sections of a login file.

    Names are not required to be unique. Lookups by name return the first
    matching section.

    Attributes:
        sections: Sections in file order
    """

    sections: list[Section] = field(default_factory=list)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __getitem__(self, index: int) -> Section:
        return self.sections[index]

    def append(self, section: Section) -> None:
        """Add a section at the end."""
        self.sections.append(section)

    @property
    def names(self) -> list[str]:
        """Get section names in file order."""
        return [s.name for s in self.sections]

    def login(self, name: str) -> Login | None:
        """Get the Login of the first section with the given name.

        Returns:
            The Login, or None if no section has that name
        """
        for section in self.sections:
            if section.name == name:
                return section.login
        return None

    def merge(self, names: Iterable[str]) -> Login | None:
        """Merge the logins of the named sections into a new Login.

        Sections are applied in the given order; for each option the last
        section that sets it wins. An empty name stands for the "client"
        section. Unknown names are skipped.

        Args:
            names: Section names, lowest precedence first

        Returns:
            The merged Login, or None if no section contributed any option

        Raises:
            TypeError: If names is a single string
        """
        if isinstance(names, str):
            raise TypeError("names must be a list of section names, not a string")
        result: Login | None = None
        for name in names:
            if not name:
                name = DEFAULT_SECTION
            login = self.login(name)
            if login is None or login.is_empty():
                logger.debug("Section [%s] has no options, skipped", name)
                continue
            if result is None:
                result = Login()
            result.merge(login)
            logger.debug("Merged options from section [%s]", name)
        return result
