"""Tests for the command-line interface."""

import json
from click.testing import CliRunner
from i18n_transformer.cli import main


class TestCli:
    """Tests for the click commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_xlsx2json(self, temp_dir, write_workbook):
        write_workbook(temp_dir / "_xlsx" / "i18n.xlsx", [
            ("key", "en", "de"),
            ("app.title", "Hi", "Hallo"),
        ])

        result = self.runner.invoke(main, ["xlsx2json", "i18n", "--root", str(temp_dir)])

        assert result.exit_code == 0, result.output
        assert "[xlsx2json] Done: 2 unit(s)" in result.output
        data = json.loads((temp_dir / "_json" / "i18n" / "de.json").read_text(encoding="utf-8"))
        assert data == {"app": {"title": "Hallo"}}

    def test_xlsx2json_multi(self, temp_dir, write_workbook):
        write_workbook(temp_dir / "_xlsx" / "i18n" / "en-US.xlsx", [("key", "en"), ("a.0", "x")])

        result = self.runner.invoke(main, ["xlsx2json", "i18n", "--multi", "--root", str(temp_dir)])

        assert result.exit_code == 0, result.output
        data = json.loads((temp_dir / "_json" / "i18n" / "en-US.json").read_text(encoding="utf-8"))
        assert data == {"a": ["x"]}

    def test_xlsx2json_missing_input(self, temp_dir):
        result = self.runner.invoke(main, ["xlsx2json", "i18n", "--root", str(temp_dir)])

        assert result.exit_code == 1
        assert "[xlsx2json] Input file not found" in result.output

    def test_xlsx2json_multi_missing_input(self, temp_dir):
        result = self.runner.invoke(main, ["xlsx2json", "i18n", "--multi", "--root", str(temp_dir)])

        assert result.exit_code == 1
        assert "[xlsx2json] Input directory not found" in result.output

    def test_xlsx2json_malformed_key(self, temp_dir, write_workbook):
        write_workbook(temp_dir / "_xlsx" / "i18n.xlsx", [
            ("key", "en"),
            ("a..b", "x"),
            ("c", "y"),
        ])

        failed = self.runner.invoke(main, ["xlsx2json", "i18n", "--root", str(temp_dir)])
        assert failed.exit_code == 1
        assert "a..b" in failed.output

        skipped = self.runner.invoke(
            main, ["xlsx2json", "i18n", "--root", str(temp_dir), "--skip-malformed"]
        )
        assert skipped.exit_code == 0, skipped.output
        data = json.loads((temp_dir / "_json" / "i18n" / "en.json").read_text(encoding="utf-8"))
        assert data == {"c": "y"}

    def test_json2xlsx(self, temp_dir):
        json_dir = temp_dir / "_json" / "i18n"
        json_dir.mkdir(parents=True)
        (json_dir / "en.json").write_text('{"app": {"title": "Hi"}}', encoding="utf-8")

        result = self.runner.invoke(main, ["json2xlsx", "i18n", "--root", str(temp_dir)])

        assert result.exit_code == 0, result.output
        assert (temp_dir / "_xlsx" / "i18n.xlsx").exists()

    def test_json2xlsx_missing_input(self, temp_dir):
        result = self.runner.invoke(main, ["json2xlsx", "i18n", "--root", str(temp_dir)])

        assert result.exit_code == 1
        assert "[json2xlsx] Input directory not found" in result.output

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output
