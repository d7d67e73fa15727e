"""Tests for the strict-markup command-line tool."""

import io
import json

import pytest

from strict_markup_parser import __version__
from strict_markup_parser.cli.main import create_argument_parser, format_validation, main


@pytest.fixture
def valid_file(tmp_path):
    path = tmp_path / "valid.html"
    path.write_text('<div id="main">文本<br/></div>', encoding="utf-8")
    return path


@pytest.fixture
def invalid_file(tmp_path):
    path = tmp_path / "invalid.html"
    path.write_text("<div>\n<p></div>", encoding="utf-8")
    return path


class TestArgumentParser:
    """Test argument parsing."""

    def test_subcommands(self):
        parser = create_argument_parser()
        args = parser.parse_args(["validate", "--format", "json", "a.html", "b.html"])

        assert args.command == "validate"
        assert args.format == "json"
        assert args.paths == ["a.html", "b.html"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "strict-markup" in capsys.readouterr().out


class TestCommands:
    """Test each subcommand end to end."""

    def test_parse(self, valid_file, capsys):
        assert main(["parse", str(valid_file)]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output[0]["success"] is True
        div = output[0]["nodes"][0]
        assert div["tag_name"] == "div"
        assert div["attributes"] == {"id": "main"}
        assert [child["node_type"] for child in div["children"]] == ["TEXT", "ELEMENT"]
        assert div["children"][0]["text"] == "文本"

    def test_parse_invalid(self, invalid_file, capsys):
        assert main(["parse", str(invalid_file)]) == 1

        output = json.loads(capsys.readouterr().out)
        error = output[0]["error"]
        assert output[0]["success"] is False
        assert error["kind"] == "STRUCTURE"
        assert error["position"]["line"] == 2

    def test_tokenize(self, valid_file, capsys):
        assert main(["tokenize", str(valid_file)]) == 0

        tokens = json.loads(capsys.readouterr().out)[0]["tokens"]
        assert [token["type"] for token in tokens] == [
            "OPENING_TAG", "TEXT", "SELF_CLOSING_TAG", "CLOSING_TAG"
        ]

    def test_format(self, valid_file, capsys):
        assert main(["format", str(valid_file)]) == 0
        assert capsys.readouterr().out == '<div id="main">文本<br /></div>\n'

    def test_format_invalid_reports_to_stderr(self, invalid_file, capsys):
        assert main(["format", str(invalid_file)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unmatched closing tag </div>" in captured.err

    def test_validate_text(self, valid_file, invalid_file, capsys):
        assert main(["validate", str(valid_file), str(invalid_file)]) == 1

        output = capsys.readouterr().out
        assert "Validated 2 inputs, 1 valid" in output
        assert f"✓ {valid_file}" in output
        assert f"✗ {invalid_file}" in output
        assert "Error at 2:4: Unmatched closing tag </div>: expected </p>" in output

    def test_validate_json(self, valid_file, capsys):
        assert main(["validate", "--format", "json", str(valid_file)]) == 0

        result = json.loads(capsys.readouterr().out)[0]
        assert result["success"] is True
        assert result["elements"] == 2
        assert result["max_depth"] == 2

    def test_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.html"
        assert main(["parse", str(missing)]) == 1

        output = json.loads(capsys.readouterr().out)
        assert output[0]["success"] is False
        assert "message" in output[0]["error"]

    @pytest.mark.parametrize("command", ["parse", "validate", "format"])
    def test_undecodable_file(self, tmp_path, valid_file, capsys, command):
        path = tmp_path / "latin1.html"
        path.write_bytes(b"<p>\xff</p>")

        assert main([command, str(path), str(valid_file)]) == 1

        captured = capsys.readouterr()
        assert "utf-8" in captured.out + captured.err

    def test_undecodable_file_reported_per_input(self, tmp_path, valid_file, capsys):
        path = tmp_path / "latin1.html"
        path.write_bytes(b"<p>\xff</p>")

        assert main(["validate", "--format", "json", str(path), str(valid_file)]) == 1

        first, second = json.loads(capsys.readouterr().out)
        assert first["success"] is False
        assert "can't decode byte 0xff" in first["error"]["message"]
        assert second["success"] is True

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<a>x</a>"))
        assert main(["format", "-"]) == 0
        assert capsys.readouterr().out == "<a>x</a>\n"


class TestConfigOption:
    """Test the --config option."""

    def test_config_file(self, valid_file, tmp_path, capsys):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"track_positions": False}))

        assert main(["--config", str(config_path), "tokenize", str(valid_file)]) == 0

        tokens = json.loads(capsys.readouterr().out)[0]["tokens"]
        assert all("position" not in token for token in tokens)

    def test_invalid_config_file(self, valid_file, tmp_path, capsys):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"logging_level": "LOUD"}))

        assert main(["--config", str(config_path), "parse", str(valid_file)]) == 1
        assert capsys.readouterr().err.startswith("Error: ")


class TestFormatValidation:
    """Test the text report."""

    def test_error_without_position(self):
        report = format_validation([
            {"file": "a.html", "success": False, "error": {"message": "No such file"}},
        ])
        assert report.splitlines() == [
            "Validated 1 inputs, 0 valid",
            "-" * 50,
            "✗ a.html",
            "   Error: No such file",
        ]
