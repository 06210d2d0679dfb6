"""Tests for the Manuscript Studio CLI commands."""
from __future__ import annotations

import subprocess

from click.testing import CliRunner
from flask import Flask

from manuscript_studio.cli.main import cli

from tests.conftest import write_project


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_cli_group_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "live CSS editor and EPUB builder" in result.output

    def test_cli_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        for command in ("serve", "compile", "strip"):
            assert command in result.output


# ---------------------------------------------------------------------------
# serve command
# ---------------------------------------------------------------------------


class TestServeCommand:
    def test_serve_help_shows_options(self) -> None:
        result = CliRunner().invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--port" in result.output
        assert "--project" in result.output

    def test_serve_opens_project_and_runs(self, monkeypatch, tmp_path) -> None:
        project = write_project(tmp_path / "Book")
        calls = []
        monkeypatch.setattr(Flask, "run", lambda self, **kw: calls.append((self, kw)))

        result = CliRunner().invoke(
            cli,
            ["serve", "--port", "4100", "--project", str(project), "--config", str(tmp_path / "c.ini")],
        )
        assert result.exit_code == 0, result.output
        assert "Editor: http://127.0.0.1:4100" in result.output
        app, kwargs = calls[0]
        assert kwargs["port"] == 4100
        assert app.extensions["workspace"].session.project.name == "Book"


# ---------------------------------------------------------------------------
# compile command
# ---------------------------------------------------------------------------


class TestCompileCommand:
    def test_invalid_root_class_rejected(self, tmp_path) -> None:
        project = write_project(tmp_path / "Book")
        result = CliRunner().invoke(cli, ["compile", str(project), "--root-class", "my book"])
        assert result.exit_code == 2
        assert "Invalid root class" in result.output

    def test_compile_writes_to_output_dir(self, monkeypatch, tmp_path) -> None:
        project = write_project(tmp_path / "Book")
        commands = []

        def run(cmd, **kwargs):
            commands.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr(subprocess, "run", run)
        result = CliRunner().invoke(
            cli,
            [
                "compile",
                str(project),
                "--pandoc",
                "/usr/bin/pandoc",
                "--output-dir",
                str(tmp_path / "out"),
                "--config",
                str(tmp_path / "c.ini"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert f"Success! Compiled to: {tmp_path / 'out' / 'Book.epub'}" in result.output
        assert commands[0][0] == "/usr/bin/pandoc"
        assert not (tmp_path / "c.ini").exists()

    def test_compile_reports_missing_pandoc(self, monkeypatch, tmp_path) -> None:
        project = write_project(tmp_path / "Book")

        def run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, "run", run)
        result = CliRunner().invoke(
            cli,
            ["compile", str(project), "--output-dir", str(tmp_path / "out"), "--config", str(tmp_path / "c.ini")],
        )
        assert result.exit_code == 1
        assert "Error (PANDOC_NOT_FOUND)" in result.output

    def test_compile_rejects_non_project(self, tmp_path) -> None:
        result = CliRunner().invoke(
            cli, ["compile", str(tmp_path), "--config", str(tmp_path / "c.ini")]
        )
        assert result.exit_code == 1
        assert "Error (PROJECT_INVALID)" in result.output


# ---------------------------------------------------------------------------
# strip command
# ---------------------------------------------------------------------------


class TestStripCommand:
    def test_strip_prints_pandoc_view(self, tmp_path) -> None:
        css = tmp_path / "styles.css"
        css.write_text(".book-content {\n  margin: 0;\n}\n\n.book-content p {\n  color: red;\n}\n")
        result = CliRunner().invoke(cli, ["strip", str(css)])
        assert result.exit_code == 0
        assert result.output == "body {\n  margin: 0;\n}\n\np {\n  color: red;\n}\n"

    def test_strip_custom_root_class(self, tmp_path) -> None:
        css = tmp_path / "styles.css"
        css.write_text(".manuscript h1 { color: red; }")
        result = CliRunner().invoke(cli, ["strip", str(css), "--root-class", "manuscript"])
        assert result.output == "h1 { color: red; }"
