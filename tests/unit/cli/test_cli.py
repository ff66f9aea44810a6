#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_cli.py
"""Unit tests for the typmark command line."""

import io
import json
import logging
from unittest.mock import patch

import pytest

import typmark.cli as cli
from typmark.cli.builder import create_parser, get_exit_code_for_exception
from typmark.cli.output import print_diagnostics, should_use_rich_output
from typmark.constants import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from typmark.exceptions import (
    DependencyError,
    InvalidOptionsError,
    MalformedTableError,
    TypmarkError,
    UnsupportedHtmlError,
)
from typmark.math import Diagnostic, gateway
from typmark.resources import get_resources


@pytest.fixture
def cli_env(monkeypatch, fake_evaluator, clean_resources):
    """Route math through the fake context and keep the root logger untouched."""
    monkeypatch.setattr(gateway, "_default_evaluator", fake_evaluator)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: logging.getLogger())


@pytest.fixture
def write_input(tmp_path):
    def _write(text, name="doc.md"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.mark.unit
@pytest.mark.cli
class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args(["doc.md"])
        assert args.input == "doc.md"
        assert args.output is None
        assert args.format == "html"
        assert args.standalone is False
        assert args.no_highlight is False
        assert args.keep_partial is False
        assert args.font_path == []
        assert args.log_level == "WARNING"

    def test_repeatable_font_path(self):
        """Test that --font-path accumulates."""
        args = create_parser().parse_args(["doc.md", "--font-path", "a", "--font-path", "b"])
        assert args.font_path == ["a", "b"]

    def test_invalid_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["doc.md", "--format", "pdf"])

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "typmark" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    def test_dependency_errors(self):
        """Test missing dependencies."""
        assert get_exit_code_for_exception(DependencyError("math", [("typst", ">=0.13.0")])) == EXIT_DEPENDENCY_ERROR
        assert get_exit_code_for_exception(ImportError("typst")) == EXIT_DEPENDENCY_ERROR

    def test_validation_errors(self):
        """Test invalid options."""
        error = InvalidOptionsError("html", expected_type=int, received_type=str)
        assert get_exit_code_for_exception(error) == EXIT_VALIDATION_ERROR

    def test_rendering_errors(self):
        """Test rendering failures."""
        assert get_exit_code_for_exception(UnsupportedHtmlError("<div>")) == EXIT_RENDERING_ERROR
        assert get_exit_code_for_exception(MalformedTableError("bad")) == EXIT_RENDERING_ERROR

    def test_other_errors(self):
        """Test the general fallback."""
        assert get_exit_code_for_exception(TypmarkError("boom")) == EXIT_ERROR
        assert get_exit_code_for_exception(ValueError("boom")) == EXIT_ERROR


@pytest.mark.unit
@pytest.mark.cli
class TestLoggingSetup:
    """Tests for log level precedence."""

    def _level(self, argv):
        args = create_parser().parse_args(["doc.md", *argv])
        with patch("typmark.cli.configure_logging") as mock_configure:
            cli._setup_logging_level(args)
        return mock_configure.call_args

    def test_default_level(self):
        """Test the default level."""
        assert self._level([]).args[0] == logging.WARNING

    def test_explicit_level(self):
        """Test --log-level."""
        assert self._level(["--log-level", "ERROR"]).args[0] == logging.ERROR

    def test_verbose(self):
        """Test that --verbose lowers the default level."""
        assert self._level(["--verbose"]).args[0] == logging.DEBUG

    def test_explicit_level_beats_verbose(self):
        """Test that an explicit level is kept even with --verbose."""
        assert self._level(["--verbose", "--log-level", "ERROR"]).args[0] == logging.ERROR

    def test_trace_beats_everything(self):
        """Test that --trace selects debug output with trace formatting."""
        call = self._level(["--trace", "--log-level", "ERROR"])
        assert call.args[0] == logging.DEBUG
        assert call.kwargs["trace_mode"] is True


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for the main entry point."""

    def test_html_to_stdout(self, cli_env, write_input, capsys):
        """Test rendering HTML to stdout."""
        assert cli.main([write_input("# Hi\n\n$x$\n")]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("<h1>Hi</h1>\n<p><span class=\"math math-inline\"><svg")

    def test_html_to_file(self, cli_env, write_input, tmp_path):
        """Test writing HTML to a file."""
        target = tmp_path / "out.html"
        assert cli.main([write_input("*x*"), "-o", str(target)]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == "<p><em>x</em></p>\n"

    def test_standalone(self, cli_env, write_input, capsys):
        """Test standalone documents with a title."""
        assert cli.main([write_input("# Hi"), "--standalone", "--title", "Notes"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("<!DOCTYPE html>")
        assert "<title>Notes</title>" in out

    def test_no_highlight(self, cli_env, write_input, capsys):
        """Test that --no-highlight emits escaped code without spans."""
        assert cli.main([write_input("```python\nimport os\n```"), "--no-highlight"]) == EXIT_SUCCESS
        assert "<span" not in capsys.readouterr().out

    def test_stdin(self, cli_env, monkeypatch, capsys):
        """Test reading markup from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("*x*"))
        assert cli.main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<p><em>x</em></p>\n"

    def test_content_format(self, cli_env, write_input, capsys):
        """Test emitting the content tree as JSON."""
        assert cli.main([write_input("# Hi"), "--format", "content"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["type"] == "sequence"
        assert data["children"][0]["type"] == "heading"

    def test_math_failures_reported(self, cli_env, write_input, tmp_path, capsys):
        """Test that every math diagnostic is printed and no output is written."""
        target = tmp_path / "out.html"
        code = cli.main([write_input("$BAD1$ and $BAD2$"), "-o", str(target)])
        assert code == EXIT_RENDERING_ERROR
        err = capsys.readouterr().err
        assert "error: unknown variable: BAD1" in err
        assert "error: unknown variable: BAD2" in err
        assert not target.exists()

    def test_keep_partial(self, cli_env, write_input, tmp_path):
        """Test that --keep-partial writes the placeholder HTML and still fails."""
        target = tmp_path / "out.html"
        code = cli.main([write_input("$BAD1$ and $x$"), "-o", str(target), "--keep-partial"])
        assert code == EXIT_RENDERING_ERROR
        html = target.read_text(encoding="utf-8")
        assert html.startswith('<p><span class="math math-inline"></span> and ')

    def test_content_rejects_html(self, cli_env, write_input, capsys):
        """Test that raw HTML fails the content target."""
        assert cli.main([write_input("<div>x</div>\n"), "--format", "content"]) == EXIT_RENDERING_ERROR
        assert "HTML block is not supported" in capsys.readouterr().err

    def test_content_math_failure(self, cli_env, write_input, capsys):
        """Test that the content target stops at the first failing span."""
        assert cli.main([write_input("$BAD1$ and $BAD2$"), "--format", "content"]) == EXIT_RENDERING_ERROR
        err = capsys.readouterr().err
        assert "unknown variable: BAD1" in err
        assert "BAD2" not in err

    def test_missing_input(self, cli_env, tmp_path, capsys):
        """Test that an unreadable input file is reported."""
        assert cli.main([str(tmp_path / "missing.md")]) == EXIT_ERROR
        assert "cannot read" in capsys.readouterr().err

    def test_font_path_reaches_resources(self, cli_env, write_input, tmp_path):
        """Test that --font-path initialises the shared resources."""
        fonts = tmp_path / "fonts"
        fonts.mkdir()
        assert cli.main([write_input("plain"), "--font-path", str(fonts)]) == EXIT_SUCCESS
        assert str(fonts) in get_resources().font_paths


@pytest.mark.unit
@pytest.mark.cli
class TestRichOutput:
    """Tests for Rich-formatted diagnostics."""

    def test_not_requested(self):
        """Test that Rich output is off without --rich."""
        args = create_parser().parse_args(["doc.md", "--force-rich"])
        assert should_use_rich_output(args) is False

    def test_not_a_terminal(self):
        """Test that --rich alone needs a terminal."""
        pytest.importorskip("rich")
        args = create_parser().parse_args(["doc.md", "--rich"])
        assert should_use_rich_output(args, stream=io.StringIO()) is False

    def test_forced(self):
        """Test that --force-rich skips the terminal check."""
        pytest.importorskip("rich")
        args = create_parser().parse_args(["doc.md", "--rich", "--force-rich"])
        assert should_use_rich_output(args, stream=io.StringIO()) is True

    def test_missing_rich(self, monkeypatch):
        """Test that requesting Rich without the library is a dependency error."""
        monkeypatch.setattr("typmark.cli.output.check_rich_available", lambda: False)
        args = create_parser().parse_args(["doc.md", "--rich"])
        with pytest.raises(DependencyError):
            should_use_rich_output(args)

    def test_diagnostics_table(self, cli_env, write_input, capsys):
        """Test that diagnostics are shown in a table."""
        pytest.importorskip("rich")
        code = cli.main([write_input("$BAD1$"), "--rich", "--force-rich"])
        assert code == EXIT_RENDERING_ERROR
        err = capsys.readouterr().err
        assert "Math Diagnostics" in err
        assert "unknown variable: BAD1" in err

    def test_plain_diagnostics(self, capsys):
        """Test the plain form."""
        print_diagnostics([Diagnostic("error", "boom", ("fix it",))])
        assert capsys.readouterr().err == "error: boom\n  hint: fix it\n"
