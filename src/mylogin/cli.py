"""Command line tool to dump the content of .mylogin.cnf.

Usage:
  mylogin [SECTION]                  decrypted content, or one raw section
  mylogin --json SECTION...          merged options as JSON
  mylogin --template TMPL SECTION... merged options through a format string
  mylogin --replay SECTION...        mysql_config_editor command recreating them
  mylogin --dsn [--database DB] [SECTION...]
                                     go-sql-driver/mysql DSN (default: client)

Exit codes: 0=OK, 1=error, 2=usage.
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from collections.abc import Sequence
from typing import TextIO

from . import __version__
from .exceptions import MyLoginError
from .loginfile import LoginFile
from .models import DEFAULT_SECTION, Login
from .parsing import filter_section
from .paths import LOGIN_FILE_ENV, default_file

logger = logging.getLogger("mylogin")


def format_json(login: Login) -> str:
    """Render the options that are set as a JSON object."""
    return json.dumps(login.to_dict(), indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def format_template(login: Login, template: str) -> str:
    """Render a str.format() template, e.g. "{user}@{host}".

    Options that are not set expand to the empty string.
    """
    values = {name: "" for name in ("user", "password", "host", "port", "socket")}
    values.update(login.to_dict())
    return template.format_map(values)


def format_replay(login: Login, section: str) -> str:
    """Render the mysql_config_editor command that recreates a login path.

    The password itself is never printed: -p makes mysql_config_editor
    prompt for it.
    """
    args = ["mysql_config_editor", "set", "--skip-warn", "-G", section]
    if login.user is not None:
        args += ["-u", login.user]
    if login.password is not None:
        args.append("-p")
    if login.host is not None:
        args += ["-h", login.host]
    if login.port is not None:
        args += ["-P", login.port]
    if login.socket is not None:
        args += ["-S", login.socket]
    return " ".join(args) + "\n"


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mylogin",
        description="Dump the content of a MySQL login path file (.mylogin.cnf)",
    )
    ap.add_argument(
        "--file",
        default=None,
        help=f"login file path (default: ${LOGIN_FILE_ENV} or ~/.mylogin.cnf)",
    )
    fmt = ap.add_mutually_exclusive_group()
    fmt.add_argument("--json", action="store_true", help="JSON format")
    fmt.add_argument("--replay", action="store_true", help="mysql_config_editor commands format")
    fmt.add_argument("--template", metavar="TMPL", help="str.format() template")
    fmt.add_argument("--dsn", action="store_true", help="go-sql-driver/mysql DSN format")
    ap.add_argument("--database", default="", help="database name appended to the DSN")
    ap.add_argument(
        "--default-port",
        default=None,
        metavar="PORT",
        help="port used in the DSN when none is set",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("sections", nargs="*", metavar="SECTION", help="login path names")
    return ap


def _dump(login_file: LoginFile, sections: list[str], out: TextIO) -> None:
    rd = login_file.plain_text()
    if sections:
        rd = filter_section(rd, sections[0])
    buffer = getattr(out, "buffer", None)
    if buffer is None:
        out.write(rd.read().decode("utf-8", errors="replace"))
        return
    out.flush()
    shutil.copyfileobj(rd, buffer)
    buffer.flush()


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Run the command line tool.

    Returns:
        Process exit code
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if out is None:
        out = sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    formatted = args.json or args.replay or args.template is not None
    if formatted and not args.sections:
        parser.error("missing section name")

    path = args.file if args.file else default_file()
    try:
        login_file = LoginFile.open(path)

        if not (formatted or args.dsn):
            _dump(login_file, args.sections, out)
            return 0

        names = args.sections or [DEFAULT_SECTION]
        login = login_file.sections().merge(names)

        if args.dsn:
            text = (login or Login()).dsn(default_port=args.default_port)
            out.write(text + args.database + "\n")
            return 0

        if login is None:
            logger.error("section doesn't exist")
            return 1
        if args.json:
            out.write(format_json(login))
        elif args.replay:
            out.write(format_replay(login, names[0]))
        else:
            out.write(format_template(login, args.template))
    except (OSError, MyLoginError) as e:
        logger.error("%s: %s", path, e)
        return 1
    except (KeyError, ValueError) as e:
        logger.error("template: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
