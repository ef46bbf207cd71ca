"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from xaml_forge.cli import main
from xaml_forge.markup.builder import parse_markup
from xaml_forge.serialize import to_markup
from tests.fixture_loader import fixture_path, load_fixture_text


class TestCheckCommand:
    """Tests for the check command."""

    def test_valid_file(self) -> None:
        """Test a valid file exits 0."""
        result = CliRunner().invoke(main, ["check", str(fixture_path("valid", "button.xaml"))])

        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_quiet(self) -> None:
        """Test quiet mode prints nothing for valid files."""
        result = CliRunner().invoke(main, ["check", "-q", str(fixture_path("valid", "button.xaml"))])

        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_invalid_file(self, invalid_markup_file: Path) -> None:
        """Test an invalid file exits 1 and shows the error."""
        result = CliRunner().invoke(main, ["check", str(invalid_markup_file)])

        assert result.exit_code == 1
        assert "Invalid" in result.output
        assert "attribute" in result.output

    def test_json_output(self, invalid_markup_file: Path) -> None:
        """Test JSON output describes the error."""
        result = CliRunner().invoke(main, ["check", "-o", "json", str(invalid_markup_file)])

        assert result.exit_code == 1
        (entry,) = json.loads(result.output)
        assert entry["valid"] is False
        assert entry["error"]["class"] == "UnknownAttributeError"
        assert entry["error"]["type"] == "attribute"
        assert (entry["error"]["line"], entry["error"]["column"]) == (2, 13)

    def test_directory(self, markup_dir: Path) -> None:
        """Test recursive checking of a directory."""
        result = CliRunner().invoke(main, ["check", "-r", "-o", "json", str(markup_dir)])

        assert result.exit_code == 0
        entries = json.loads(result.output)
        assert [entry["controls"] for entry in entries] == [1, 12]

    def test_directory_without_recursive(self, markup_dir: Path) -> None:
        """Test a directory without --recursive is an error."""
        result = CliRunner().invoke(main, ["check", str(markup_dir)])

        assert result.exit_code == 1
        assert "--recursive" in result.output

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Test a directory without markup files."""
        result = CliRunner().invoke(main, ["check", "-r", str(tmp_path)])

        assert result.exit_code == 0
        assert "No markup files" in result.output


class TestCompileCommand:
    """Tests for the compile command."""

    def test_compile_to_out_dir(self, markup_dir: Path, tmp_path: Path) -> None:
        """Test modules are written to the output directory."""
        out_dir = tmp_path / "generated"

        result = CliRunner().invoke(
            main, ["compile", "-r", "--out-dir", str(out_dir), str(markup_dir)]
        )

        assert result.exit_code == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["button_ui.py", "settings_panel_ui.py"]

    def test_function_name(self, markup_dir: Path) -> None:
        """Test the generated function name is configurable."""
        source = markup_dir / "views" / "button.xaml"

        result = CliRunner().invoke(main, ["compile", "-q", "--function-name", "make_button", str(source)])

        assert result.exit_code == 0
        assert "def make_button(backend):" in (source.parent / "button_ui.py").read_text(encoding="utf-8")

    def test_compile_error(self, invalid_markup_file: Path) -> None:
        """Test an invalid file prints a diagnostic and exits 1."""
        result = CliRunner().invoke(main, ["compile", str(invalid_markup_file)])

        assert result.exit_code == 1
        assert "broken.xaml:2:13: error: Unknown attribute 'Color' on <Button>" in result.output
        assert not (invalid_markup_file.parent / "broken_ui.py").exists()


class TestTreeCommand:
    """Tests for the tree command."""

    def test_tree(self) -> None:
        """Test the control tree is printed."""
        result = CliRunner().invoke(main, ["tree", str(fixture_path("valid", "settings_panel.xaml"))])

        assert result.exit_code == 0
        for name in ("Border", "StackPanel", "ComboBoxItem", "Button"):
            assert name in result.output

    def test_tree_invalid(self, invalid_markup_file: Path) -> None:
        """Test an invalid file exits 1."""
        result = CliRunner().invoke(main, ["tree", str(invalid_markup_file)])

        assert result.exit_code == 1


class TestFormatCommand:
    """Tests for the format command."""

    def test_canonical_output(self) -> None:
        """Test the file is printed in canonical form."""
        result = CliRunner().invoke(main, ["format", str(fixture_path("valid", "settings_panel.xaml"))])

        assert result.exit_code == 0
        expected = to_markup(parse_markup(load_fixture_text("valid", "settings_panel.xaml")))
        assert result.output == expected
