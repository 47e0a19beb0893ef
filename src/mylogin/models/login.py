"""Login model: the credentials of one login path."""

from __future__ import annotations

from dataclasses import dataclass, fields

# Option names, in the order used for JSON and template output
OPTION_NAMES = ("user", "password", "host", "socket", "port")


@dataclass
class Login:
    """Connection options of a login path.

    Every field is optional. None means the option is not set, which is
    different from an option set to the empty string.

    Attributes:
        user: MySQL user name
        password: Password
        host: TCP host name
        port: TCP port, kept as text as it appears in the file
        socket: Unix socket path
    """

    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: str | None = None
    socket: str | None = None

    def is_empty(self) -> bool:
        """Check whether no option is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def set_option(self, name: str, value: str) -> bool:
        """Set an option by name.

        Returns:
            False if name is not a known option
        """
        if name not in OPTION_NAMES:
            return False
        setattr(self, name, value)
        return True

    def merge(self, other: Login | None) -> None:
        """Copy every option set in other over this login.

        Options not set in other are left untouched.
        """
        if other is None:
            return
        for f in fields(self):
            value = getattr(other, f.name)
            if value is not None:
                setattr(self, f.name, value)

    def to_dict(self) -> dict[str, str]:
        """Return the options that are set, keyed by option name."""
        result = {}
        for name in OPTION_NAMES:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    def dsn(self, default_port: str | None = None) -> str:
        """Build a DSN in the go-sql-driver/mysql format.

        The DSN always ends with '/', ready for the database name to be
        appended. An empty login gives just "/".

        Args:
            default_port: Port used for TCP when no port is set. By default
                the port is left empty.

        Returns:
            user:password@tcp(host:port)/ or user@unix(socket)/ style string
        """
        if self.is_empty():
            return "/"

        parts: list[str] = []
        if self.user is not None:
            parts.append(self.user)
            if self.password is not None:
                parts.append(":" + self.password)
            parts.append("@")

        if self.socket is not None:
            parts.append(f"unix({self.socket})")
        elif self.host is not None or self.port is not None:
            host = self.host or ""
            port = self.port if self.port is not None else (default_port or "")
            parts.append(f"tcp({_join_host_port(host, port)})")

        # The separator with the database name
        parts.append("/")
        return "".join(parts)

    def __str__(self) -> str:
        return self.dsn()


def _join_host_port(host: str, port: str) -> str:
    # IPv6 literals need brackets
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
