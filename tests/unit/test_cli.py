"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from abacus.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command away from any abacus.toml in the checkout."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ABACUS_OUTPUT_STYLE", raising=False)
    return tmp_path


@pytest.fixture
def program(tmp_path: Path) -> Path:
    """A source file mixing definitions, results and one failing statement."""
    path = tmp_path / "program.abc"
    path.write_text(
        "fn inc(num) {\n"
        "  num + 1\n"
        "}\n"
        "inc(4)\n"
        "\n"
        "2//3 * 3//4\n"
        "if 1 < 2 { true } else { false }\n"
    )
    return path


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "abacus version" in result.output


class TestEval:
    """abacus eval EXPR"""

    def test_value(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2 + 2"])
        assert result.exit_code == 0
        assert result.output.strip() == "4"

    def test_condition(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2 < 3 & 1 < 4"])
        assert result.exit_code == 0
        assert result.output.strip() == "true"

    def test_marked_style(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--style", "marked", "3//4 + 2.5"])
        assert result.exit_code == 0
        assert result.output.strip() == "< 3.25"

    def test_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 / 0"])
        assert result.exit_code == 1
        assert "Evaluation error" in result.output

    def test_style_from_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "abacus.toml").write_text('[abacus]\noutput_style = "marked"\n')
        result = cli_runner.invoke(app, ["eval", "1 + 1"])
        assert result.exit_code == 0
        assert result.output.strip() == "< 2"

    def test_missing_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["eval", "--config", str(tmp_path / "nope.toml"), "1"])
        assert result.exit_code == 2
        assert "Config file not found" in result.output


class TestRun:
    """abacus run FILE"""

    def test_program(self, cli_runner: CliRunner, program: Path) -> None:
        result = cli_runner.invoke(app, ["run", str(program)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["# function inc(1)", "5", "1 / 2", "true"]

    def test_failure_sets_exit_code(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.abc"
        path.write_text("1 $ 2\n2 + 2\n")
        result = cli_runner.invoke(app, ["run", str(path)])
        assert result.exit_code == 1
        assert "Lexical error" in result.output
        assert "4" in result.output.splitlines()

    def test_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["run", str(tmp_path / "missing.abc")])
        assert result.exit_code != 0


class TestRepl:
    """abacus repl"""

    def test_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            app, ["repl"], input="2 + 2\nfn inc(num) {\nnum + 1 }\ninc(4)\n"
        )
        assert result.exit_code == 0
        assert "4" in result.output
        assert "# function inc(1)" in result.output
        assert "5" in result.output

    def test_continuation_prompt(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="if true {\n1 } else { 2 }\n")
        assert "... " in result.output

    def test_errors_do_not_stop_the_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="nope(1)\n2 * 3\n")
        assert result.exit_code == 0
        assert "Parse error: Function does not exist: nope" in result.output
        assert "6" in result.output

    def test_unfinished_statement_at_end_of_input(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="fn f(x) {\n")
        assert result.exit_code == 0
        assert "Unexpected end of input" in result.output

    def test_default_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [], input="1 + 1\n")
        assert result.exit_code == 0
        assert "2" in result.output
