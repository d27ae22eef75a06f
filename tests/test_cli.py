"""Tests for the cardforge click CLI."""

import pytest
from click.testing import CliRunner

from cardforge.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestGenerateCommand:

    def test_generates_cards(self, runner, template_path, cards_csv, tmp_path):
        out_dir = tmp_path / "cards"

        result = runner.invoke(cli, [
            "generate", str(template_path), str(cards_csv), "--out-dir", str(out_dir),
        ])

        assert result.exit_code == 0, result.output
        assert "Generated 2 cards" in result.output
        assert (out_dir / "card_ada_lovelace.svg").exists()
        assert (out_dir / "card_alan_turing.svg").exists()

    def test_config_file_and_parallel(self, runner, template_path, cards_csv, tmp_path):
        config = tmp_path / "cardforge.yml"
        config.write_text("selectors:\n  level: '#card-level'\n", encoding="utf-8")
        out_dir = tmp_path / "cards"

        result = runner.invoke(cli, [
            "generate", str(template_path), str(cards_csv),
            "--out-dir", str(out_dir), "--config", str(config), "--parallel", "2",
        ])

        assert result.exit_code == 0, result.output
        assert 'id="card-level"' in (out_dir / "card_alan_turing.svg").read_text(encoding="utf-8")
        assert ">4</text>" in (out_dir / "card_alan_turing.svg").read_text(encoding="utf-8")

    def test_bad_csv_reports_error(self, runner, template_path, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_text("title\nA,B\n", encoding="utf-8")

        result = runner.invoke(cli, [
            "generate", str(template_path), str(bad), "--out-dir", str(tmp_path / "out"),
        ])

        assert result.exit_code == 1
        assert "more fields than the header" in result.output

    def test_missing_template_is_usage_error(self, runner, cards_csv, tmp_path):
        result = runner.invoke(cli, ["generate", str(tmp_path / "nope.svg"), str(cards_csv)])

        assert result.exit_code == 2


class TestLayoutCommand:

    def test_prints_wrapped_lines(self, runner):
        result = runner.invoke(cli, ["layout", "## Title\\nHello **world**"])

        assert result.exit_code == 0, result.output
        rows = result.output.strip().splitlines()
        assert len(rows) == 2
        assert rows[0].endswith("| Title")
        assert rows[1].endswith("bold=6:11 | Hello world")

    def test_max_width_controls_wrapping(self, runner):
        result = runner.invoke(cli, ["layout", "--max-width", "30", "one two three"])

        assert result.exit_code == 0, result.output
        assert len(result.output.strip().splitlines()) == 3

    def test_reads_file(self, runner, tmp_path):
        path = tmp_path / "text.md"
        path.write_text("* a\n* b\n", encoding="utf-8")

        result = runner.invoke(cli, ["layout", "--file", str(path)])

        assert result.exit_code == 0, result.output
        assert result.output.count("• ") == 2

    def test_explicit_font_size_is_used(self, runner):
        result = runner.invoke(cli, ["layout", "--font-size", "20", "one"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("y=  20.00")

    @pytest.mark.parametrize("option", ["--font-size=0", "--max-width=0", "--max-width=-3"])
    def test_non_positive_geometry_is_rejected(self, runner, option):
        result = runner.invoke(cli, ["layout", option, "one"])

        assert result.exit_code == 2
        assert "Invalid value" in result.output

    def test_requires_text(self, runner):
        result = runner.invoke(cli, ["layout"])

        assert result.exit_code == 2


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
