#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for config loading and the CLI builder."""

import argparse
import json

import pytest

from mdtool.cli import main
from mdtool.cli.builder import DynamicCLIBuilder, get_exit_code_for_exception, parse_space_count
from mdtool.cli.config import (
    find_config_in_parents,
    get_command_section,
    load_config_file,
    load_config_with_priority,
)
from mdtool.exceptions import (
    DependencyError,
    FileError,
    FileNotFoundError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdtool.options import MarkdownParserOptions, MarkdownRendererOptions

LONG_PARAGRAPH = " ".join(["word"] * 30) + "\n"


def line_lengths(text: str) -> list[int]:
    return [len(line) for line in text.rstrip("\n").split("\n")]


@pytest.mark.unit
class TestConfigLoading:
    """Test reading config files."""

    def test_toml(self, isolated_config):
        """Test loading a TOML file."""
        path = isolated_config / ".mdtool.toml"
        path.write_text("[fmt]\nline_width = 40\n", encoding="utf-8")
        assert load_config_file(path) == {"fmt": {"line_width": 40}}

    def test_yaml(self, isolated_config):
        """Test loading a YAML file."""
        path = isolated_config / ".mdtool.yaml"
        path.write_text("fmt:\n  bullet_char: '*'\n", encoding="utf-8")
        assert load_config_file(path) == {"fmt": {"bullet_char": "*"}}

    def test_empty_yaml(self, isolated_config):
        """Test that an empty YAML file is an empty config."""
        path = isolated_config / ".mdtool.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, isolated_config):
        """Test loading a JSON file."""
        path = isolated_config / ".mdtool.json"
        path.write_text(json.dumps({"fmt": {"hr_char": "*"}}), encoding="utf-8")
        assert load_config_file(path) == {"fmt": {"hr_char": "*"}}

    def test_pyproject_section(self, isolated_config):
        """Test that only the [tool.mdtool] table of pyproject.toml is used."""
        path = isolated_config / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdtool.fmt]\nline_width = 50\n', encoding="utf-8")
        assert load_config_file(path) == {"fmt": {"line_width": 50}}

    @pytest.mark.parametrize(
        "name,content",
        [
            (".mdtool.toml", "[fmt\n"),
            (".mdtool.yaml", "fmt: [unclosed\n"),
            (".mdtool.json", "{not json"),
            (".mdtool.yaml", "- a list\n"),
            ("config.ini", "[fmt]\n"),
        ],
    )
    def test_invalid_files(self, isolated_config, name, content):
        """Test that unreadable configs raise ArgumentTypeError."""
        path = isolated_config / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, isolated_config):
        """Test that a missing explicit config is an error."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(isolated_config / "nope.toml")

    def test_command_section(self):
        """Test picking out a command's table."""
        assert get_command_section({"fmt": {"a": 1}}, "fmt") == {"a": 1}
        assert get_command_section({}, "fmt") == {}
        with pytest.raises(argparse.ArgumentTypeError):
            get_command_section({"fmt": 3}, "fmt")


@pytest.mark.unit
class TestConfigDiscovery:
    """Test where config files are found."""

    def test_found_in_parent(self, isolated_config):
        """Test that discovery walks up from the working directory."""
        config = isolated_config / ".mdtool.toml"
        config.write_text("[fmt]\n", encoding="utf-8")
        nested = isolated_config / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_pyproject_without_section_skipped(self, isolated_config):
        """Test that a pyproject.toml without [tool.mdtool] is not a config."""
        (isolated_config / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_with_priority() == {}

    def test_home_directory(self, isolated_config, tmp_path):
        """Test the home directory fallback."""
        (tmp_path / "home" / ".mdtool.toml").write_text("[fmt]\nline_width = 33\n", encoding="utf-8")
        assert load_config_with_priority() == {"fmt": {"line_width": 33}}

    def test_priority(self, isolated_config, tmp_path, monkeypatch):
        """Test explicit path, then environment variable, then discovery."""
        (isolated_config / ".mdtool.toml").write_text("[fmt]\nline_width = 1\n", encoding="utf-8")
        env_config = tmp_path / "env.toml"
        env_config.write_text("[fmt]\nline_width = 2\n", encoding="utf-8")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("[fmt]\nline_width = 3\n", encoding="utf-8")

        assert load_config_with_priority() == {"fmt": {"line_width": 1}}
        monkeypatch.setenv("MDTOOL_CONFIG", str(env_config))
        assert load_config_with_priority() == {"fmt": {"line_width": 2}}
        assert load_config_with_priority(explicit_path=str(explicit)) == {"fmt": {"line_width": 3}}
        assert load_config_with_priority(explicit_path=str(explicit), disabled=True) == {}


@pytest.mark.unit
@pytest.mark.cli
class TestFmtConfig:
    """Test config files driving the fmt command."""

    def test_config_applied(self, write_markdown, capsys):
        """Test that the fmt table sets formatting defaults."""
        write_markdown(".mdtool.toml", "[fmt]\nline_width = 30\nbullet-char = '*'\n")
        path = write_markdown("doc.md", LONG_PARAGRAPH + "\n- item\n")
        assert main(["fmt", str(path)]) == 0
        out = capsys.readouterr().out
        assert max(line_lengths(out)) < 30
        assert "* item" in out

    def test_cli_overrides_config(self, write_markdown, capsys):
        """Test that flags win over config values."""
        write_markdown(".mdtool.toml", "[fmt]\nline_width = 30\n")
        path = write_markdown("doc.md", LONG_PARAGRAPH)
        assert main(["fmt", "--line-width", "0", str(path)]) == 0
        assert capsys.readouterr().out == LONG_PARAGRAPH

    def test_no_config(self, write_markdown, capsys):
        """Test that --no-config ignores discovered files."""
        write_markdown(".mdtool.toml", "[fmt]\nline_width = 30\n")
        path = write_markdown("doc.md", LONG_PARAGRAPH)
        assert main(["fmt", "--no-config", str(path)]) == 0
        assert max(line_lengths(capsys.readouterr().out)) > 30

    def test_explicit_config(self, write_markdown, capsys):
        """Test --config with a YAML file."""
        config = write_markdown("style.yaml", "fmt:\n  heading_style: setext\n")
        path = write_markdown("doc.md", "# Title\n")
        assert main(["fmt", "--config", str(config), str(path)]) == 0
        assert capsys.readouterr().out == "Title\n=====\n"

    def test_env_config(self, write_markdown, monkeypatch, capsys):
        """Test the MDTOOL_CONFIG environment variable."""
        config = write_markdown("style.json", json.dumps({"fmt": {"bullet_char": "+"}}))
        monkeypatch.setenv("MDTOOL_CONFIG", str(config))
        path = write_markdown("doc.md", "- a\n")
        assert main(["fmt", str(path)]) == 0
        assert capsys.readouterr().out == "+ a\n"

    def test_pyproject_config(self, write_markdown, capsys):
        """Test a [tool.mdtool.fmt] table in pyproject.toml."""
        write_markdown("pyproject.toml", "[tool.mdtool.fmt]\nlist_indent = 2\n")
        path = write_markdown("doc.md", "- a\n  - b\n")
        assert main(["fmt", str(path)]) == 0
        assert capsys.readouterr().out == "- a\n  - b\n"

    def test_parser_options_from_config(self, write_markdown, capsys):
        """Test that the fmt table also feeds parser options."""
        write_markdown(".mdtool.toml", "[fmt]\npreserve_html = false\n")
        path = write_markdown("doc.md", "<div>\nx\n</div>\n\ntext\n")
        assert main(["fmt", str(path)]) == 0
        assert capsys.readouterr().out == "text\n"

    def test_invalid_config(self, write_markdown, capsys):
        """Test that a broken config file is a validation error."""
        write_markdown(".mdtool.toml", "[fmt\n")
        path = write_markdown("doc.md", "x\n")
        assert main(["fmt", str(path)]) == 3
        assert "Invalid TOML" in capsys.readouterr().err

    def test_invalid_config_value(self, write_markdown, capsys):
        """Test that a bad value in the config is a validation error."""
        write_markdown(".mdtool.toml", "[fmt]\nheading_style = 'fancy'\n")
        path = write_markdown("doc.md", "x\n")
        assert main(["fmt", str(path)]) == 3
        assert "heading style" in capsys.readouterr().err


@pytest.mark.unit
class TestBuilder:
    """Test the options-to-argparse builder."""

    def test_parse_space_count(self):
        """Test converting counts to indent strings."""
        assert parse_space_count("3") == "   "
        for bad in ("0", "-1", "two"):
            with pytest.raises(argparse.ArgumentTypeError):
                parse_space_count(bad)

    def test_cli_names(self):
        """Test flag name inference."""
        builder = DynamicCLIBuilder()
        assert builder.snake_to_kebab("line_width") == "line-width"
        assert builder.infer_cli_name("line_width") == "--line-width"
        assert builder.infer_cli_name("preserve_html", is_boolean_with_true_default=True) == "--no-preserve-html"

    def test_flags_are_suppressed_by_default(self):
        """Test that only given flags appear in the namespace."""
        builder = DynamicCLIBuilder()
        parser = argparse.ArgumentParser()
        builder.add_options_class_arguments(parser, MarkdownRendererOptions, "formatting")
        builder.add_options_class_arguments(parser, MarkdownParserOptions, "parsing")

        parsed = parser.parse_args(["--line-width", "20", "--no-preserve-html"])
        assert vars(parsed) == {"line_width": 20, "preserve_html": False}
        assert builder.dest_to_cli_flag["line_width"] == "--line-width"

    def test_build_options_layers(self):
        """Test that config values apply first and flags override them."""
        builder = DynamicCLIBuilder()
        parsed = argparse.Namespace(bullet_char="+")
        options = builder.build_options(
            MarkdownRendererOptions, parsed, {"bullet_char": "*", "list-indent": 2, "unrelated": True}
        )
        assert options.bullet_char == "+"
        assert options.list_indent == "  "

    def test_exit_codes(self):
        """Test the exception to exit code mapping."""
        assert get_exit_code_for_exception(DependencyError("x", [("rich", "")])) == 2
        assert get_exit_code_for_exception(ImportError()) == 2
        assert get_exit_code_for_exception(ValidationError("x")) == 3
        assert get_exit_code_for_exception(argparse.ArgumentTypeError("x")) == 3
        assert get_exit_code_for_exception(FileNotFoundError("a.md")) == 4
        assert get_exit_code_for_exception(FileError("x")) == 4
        assert get_exit_code_for_exception(OSError()) == 4
        assert get_exit_code_for_exception(ParsingError("x")) == 6
        assert get_exit_code_for_exception(RenderingError("x")) == 7
        assert get_exit_code_for_exception(RuntimeError()) == 1
