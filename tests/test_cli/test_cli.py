"""Tests for the twmap CLI commands."""
from __future__ import annotations

import shutil
from pathlib import Path

from click.testing import CliRunner

from twmap import __version__
from twmap.cli.main import cli
from twmap.config import SAMPLE_CONFIG

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _project(files: dict[str, str]) -> None:
    for name, content in files.items():
        path = Path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_cli_group_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Tailwind" in result.output

    def test_cli_lists_commands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert "run" in result.output
        assert "init" in result.output
        assert "inspect" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# init command
# ---------------------------------------------------------------------------


class TestInitCommand:
    def test_creates_sample(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["init"])
            assert result.exit_code == 0
            assert "Sample config file created at: twmap.toml" in result.output
            assert Path("twmap.toml").read_text(encoding="utf-8") == SAMPLE_CONFIG

    def test_existing_file_kept(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("custom.toml").write_text('mode = "readable"\n', encoding="utf-8")
            result = runner.invoke(cli, ["init", "--path", "custom.toml"])
            assert result.exit_code == 0
            assert "Config file already exists at: custom.toml" in result.output
            assert Path("custom.toml").read_text(encoding="utf-8") == 'mode = "readable"\n'


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


class TestRunCommand:
    def test_run_help_shows_options(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["run", "--help"])
        assert result.exit_code == 0
        for option in ("--config", "--input", "--output", "--mode", "--prefix", "--dry-run"):
            assert option in result.output

    def test_run_rewrites_and_emits(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            _project({"src/index.html": '<div class="flex p-4"></div>'})
            result = runner.invoke(
                cli, ["run", "-i", "src/**/*.html", "-o", "dist/app.css", "-m", "incremental"]
            )
            assert result.exit_code == 0, result.output
            assert "Starting twmap process..." in result.output
            assert "Process completed! CSS file generated at: dist/app.css" in result.output
            assert Path("src/index.html").read_text(encoding="utf-8") == '<div class="tw-0"></div>'
            css = Path("dist/app.css").read_text(encoding="utf-8")
            assert ".tw-0 { @apply flex p-4; }" in css

    def test_dry_run_with_diff(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            _project({"src/index.html": '<div class="flex p-4"></div>\n'})
            result = runner.invoke(
                cli, ["run", "-i", "src/*.html", "-m", "incremental", "--dry-run", "--diff"]
            )
            assert result.exit_code == 0, result.output
            assert "Dry run summary: 1 file(s) would be updated." in result.output
            assert '+<div class="tw-0"></div>' in result.output
            assert "Dry run: CSS file would be generated at ./twmap.css" in result.output
            assert Path("src/index.html").read_text(encoding="utf-8") == (
                '<div class="flex p-4"></div>\n'
            )
            assert not Path("twmap.css").exists()

    def test_config_file_used(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            _project(
                {
                    "twmap.toml": 'input = ["web/*.html"]\nprefix = "x-"\nmode = "incremental"\n',
                    "web/a.html": '<p class="m-2"></p>',
                }
            )
            result = runner.invoke(cli, ["run"])
            assert result.exit_code == 0, result.output
            assert Path("web/a.html").read_text(encoding="utf-8") == '<p class="x-0"></p>'

    def test_invalid_prefix(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["run", "-p", "1bad"])
            assert result.exit_code == 1
            assert "Error: Invalid prefix" in result.output

    def test_invalid_mode_rejected_by_click(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["run", "-m", "random"])
        assert result.exit_code == 2

    def test_missing_config_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["run", "-c", "nope.toml"])
            assert result.exit_code == 1
            assert "Config file not found" in result.output

    def test_parse_failure_reported(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("src").mkdir()
            shutil.copy(FIXTURES / "broken.tsx", "src/broken.tsx")
            _project({"src/ok.html": '<p class="a"></p>'})
            result = runner.invoke(cli, ["run", "-i", "src/*.{tsx,html}"])
            assert result.exit_code == 0, result.output
            assert "Failed files (1):" in result.output
            assert "broken.tsx" in result.output


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_lists_occurrences(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(FIXTURES / "Card.tsx")])
        assert result.exit_code == 0, result.output
        assert "Kind: typed_component" in result.output
        assert "Occurrences: 5" in result.output
        assert 'className  static  "rounded-lg shadow-md p-6"' in result.output
        assert "className  dynamic" in result.output

    def test_parse_error(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", str(FIXTURES / "broken.tsx")])
        assert result.exit_code == 1
        assert "Error: parse error" in result.output

    def test_unsupported_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("styles.css").write_text("", encoding="utf-8")
            result = runner.invoke(cli, ["inspect", "styles.css"])
            assert result.exit_code == 1
            assert "Unsupported file type" in result.output
