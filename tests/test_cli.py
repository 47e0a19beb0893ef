"""Tests for the mylogin command line tool."""

import io
import json
from pathlib import Path

import pytest

from mylogin.cli import format_json, format_replay, format_template, main
from mylogin.models import Login
from mylogin.paths import LOGIN_FILE_ENV
from mylogin.testing import SAMPLE_PLAINTEXT, build_login_file


@pytest.fixture
def login_path(tmp_path: Path) -> Path:
    """Write the sample login file."""
    path = tmp_path / ".mylogin.cnf"
    path.write_bytes(build_login_file())
    return path


def run(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    code = main(list(argv), out=out)
    return code, out.getvalue()


class TestFormatters:
    """Tests for the output formatters."""

    def test_format_json(self) -> None:
        """Test JSON output with sorted keys."""
        text = format_json(Login(user="u", port="3306"))
        assert text == '{\n  "port": "3306",\n  "user": "u"\n}\n'

    def test_format_template(self) -> None:
        """Test that unset options expand to nothing."""
        assert format_template(Login(user="u"), "{user}@{host}") == "u@"

    def test_format_template_unknown_field(self) -> None:
        """Test an unknown template field."""
        with pytest.raises(KeyError):
            format_template(Login(), "{database}")

    def test_format_replay(self) -> None:
        """Test the mysql_config_editor command line."""
        login = Login(user="u", password="p", host="h", port="1", socket="/s")
        assert format_replay(login, "x") == (
            "mysql_config_editor set --skip-warn -G x -u u -p -h h -P 1 -S /s\n"
        )

    def test_format_replay_hides_password(self) -> None:
        """Test that the password value is never printed."""
        assert "secret" not in format_replay(Login(password="secret"), "client")


class TestDump:
    """Tests for the raw dump mode."""

    def test_dump_all(self, login_path: Path) -> None:
        """Test dumping the whole decrypted content."""
        code, output = run("--file", str(login_path))
        assert code == 0
        assert output == SAMPLE_PLAINTEXT.decode("utf-8")

    def test_dump_one_section(self, login_path: Path) -> None:
        """Test dumping the raw lines of one section."""
        code, output = run("--file", str(login_path), "local")
        assert code == 0
        assert output == '[local]\nsocket = "/var/run/mysqld/mysqld.sock"\n'

    def test_dump_missing_section(self, login_path: Path) -> None:
        """Test that an unknown section dumps nothing."""
        assert run("--file", str(login_path), "missing") == (0, "")

    def test_file_from_environment(
        self, login_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the default file location override."""
        monkeypatch.setenv(LOGIN_FILE_ENV, str(login_path))
        code, output = run("backup")
        assert code == 0
        assert output.startswith("[backup]\n")


class TestFormattedOutput:
    """Tests for the JSON, template, replay and DSN modes."""

    def test_json(self, login_path: Path) -> None:
        """Test JSON output of merged sections."""
        code, output = run("--file", str(login_path), "--json", "client", "backup")
        assert code == 0
        assert json.loads(output) == {
            "user": "backup",
            "password": "secret",
            "host": "db.example.com",
            "port": "3306",
        }

    def test_template(self, login_path: Path) -> None:
        """Test template output."""
        code, output = run("--file", str(login_path), "--template", "{user}@{host}", "backup")
        assert code == 0
        assert output == "backup@db.example.com"

    def test_template_error(self, login_path: Path) -> None:
        """Test that a bad template fails."""
        code, _ = run("--file", str(login_path), "--template", "{database}", "backup")
        assert code == 1

    def test_replay(self, login_path: Path) -> None:
        """Test replay output."""
        code, output = run("--file", str(login_path), "--replay", "backup")
        assert code == 0
        assert output == (
            "mysql_config_editor set --skip-warn -G backup "
            "-u backup -h db.example.com -P 3306\n"
        )

    def test_replay_client(self, login_path: Path) -> None:
        """Test replay output with a password."""
        code, output = run("--file", str(login_path), "--replay", "client")
        assert code == 0
        assert output == "mysql_config_editor set --skip-warn -G client -u root -p\n"

    def test_dsn(self, login_path: Path) -> None:
        """Test DSN output with a database name."""
        code, output = run(
            "--file", str(login_path), "--dsn", "--database", "mydb", "client", "backup"
        )
        assert code == 0
        assert output == "backup:secret@tcp(db.example.com:3306)/mydb\n"

    def test_dsn_default_section(self, login_path: Path) -> None:
        """Test that --dsn reads the client section by default."""
        assert run("--file", str(login_path), "--dsn") == (0, "root:secret@/\n")

    def test_dsn_socket(self, login_path: Path) -> None:
        """Test a DSN with a socket."""
        code, output = run("--file", str(login_path), "--dsn", "local")
        assert code == 0
        assert output == "unix(/var/run/mysqld/mysqld.sock)/\n"

    def test_dsn_default_port(self, tmp_path: Path) -> None:
        """Test the --default-port option."""
        path = tmp_path / "f.cnf"
        path.write_bytes(build_login_file(b"[client]\nhost = db\n"))
        code, output = run("--file", str(path), "--dsn", "--default-port", "3306")
        assert code == 0
        assert output == "tcp(db:3306)/\n"

    def test_dsn_missing_section(self, login_path: Path) -> None:
        """Test that a DSN of unknown sections is empty."""
        assert run("--file", str(login_path), "--dsn", "missing") == (0, "/\n")


class TestErrors:
    """Tests for exit codes."""

    def test_format_without_section(self, login_path: Path) -> None:
        """Test that JSON output needs a section."""
        with pytest.raises(SystemExit) as exc_info:
            run("--file", str(login_path), "--json")
        assert exc_info.value.code == 2

    def test_exclusive_formats(self, login_path: Path) -> None:
        """Test that only one output format can be chosen."""
        with pytest.raises(SystemExit) as exc_info:
            run("--file", str(login_path), "--json", "--dsn", "client")
        assert exc_info.value.code == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing login file."""
        assert run("--file", str(tmp_path / "missing.cnf")) == (1, "")

    def test_unknown_section(self, login_path: Path) -> None:
        """Test formatted output of unknown sections."""
        assert run("--file", str(login_path), "--json", "missing") == (1, "")

    def test_corrupted_file(self, tmp_path: Path) -> None:
        """Test a truncated login file."""
        path = tmp_path / "bad.cnf"
        path.write_bytes(b"\x00" * 10)
        assert run("--file", str(path)) == (1, "")

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Test a file with an unknown option."""
        path = tmp_path / "bad.cnf"
        path.write_bytes(build_login_file(b"[client]\ndatabase = x\n"))
        assert run("--file", str(path), "--json", "client") == (1, "")
