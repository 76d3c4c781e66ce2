# tests/test_cli.py
"""
Tests for the command-line interface.
"""

import io
import json
import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def fake_stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BufferedReader(io.BytesIO(data))))


@pytest.fixture
def go_file(tmp_path):
    path = tmp_path / "main.go"
    path.write_bytes(b'package main\nfunc main() { print("hi") }\n')
    return path


class TestFiles:
    """Tests for highlighting file arguments."""

    def test_highlight_file(self, config_file, go_file, capsys):
        """Test a file is highlighted by the language of its extension."""
        from hilicat.__main__ import main

        assert main(["--config", str(config_file), str(go_file)]) == 0

        out = capsys.readouterr().out
        assert out == (
            f"{CYAN}package{RESET} main\n"
            f"{CYAN}func{RESET} main() {{ print({GREEN}\"hi\"{RESET}) }}\n"
        )

    def test_numbering_restarts_per_file(self, config_file, tmp_path, capsys):
        """Test every file gets its own line counter."""
        from hilicat.__main__ import main

        first = tmp_path / "a.txt"
        second = tmp_path / "b.txt"
        first.write_bytes(b"one\ntwo\n")
        second.write_bytes(b"three\n")

        assert main(["--config", str(config_file), "-n", str(first), str(second)]) == 0
        assert capsys.readouterr().out == "    1  one\n    2  two\n    1  three\n"

    def test_display_flags(self, config_file, tmp_path, capsys):
        """Test -b, -s and -E together."""
        from hilicat.__main__ import main

        path = tmp_path / "notes.txt"
        path.write_bytes(b"a\n\n\n\nb\n")

        assert main(["--config", str(config_file), "-b", "-s", "-E", str(path)]) == 0
        assert capsys.readouterr().out == "    1  a$\n     $\n    2  b$\n"

    def test_lang_override(self, config_file, tmp_path, capsys):
        """Test --lang wins over the extension."""
        from hilicat.__main__ import main

        path = tmp_path / "script.txt"
        path.write_bytes(b"func\n")

        assert main(["--config", str(config_file), "--lang", "go", str(path)]) == 0
        assert capsys.readouterr().out == f"{CYAN}func{RESET}\n"

    def test_crlf_file_auto_detected(self, config_file, tmp_path, capsys):
        """Test CRLF files keep their line endings."""
        from hilicat.__main__ import main

        path = tmp_path / "dos.txt"
        path.write_bytes(b"a\r\nb\r\n")

        assert main(["--config", str(config_file), "-n", str(path)]) == 0
        assert capsys.readouterr().out == "    1  a\r\n    2  b\r\n"

    def test_undetectable_language_is_skipped(self, config_file, go_file, tmp_path, capsys):
        """Test a file with an unknown extension fails but others still print."""
        from hilicat.__main__ import main

        rust = tmp_path / "main.rs"
        rust.write_bytes(b"fn main() {}\n")

        assert main(["--config", str(config_file), str(rust), str(go_file)]) == 1

        captured = capsys.readouterr()
        assert "Could not determine language for" in captured.err
        assert "main.rs" in captured.err
        assert f"{CYAN}package{RESET} main" in captured.out

    def test_missing_file_is_skipped(self, config_file, go_file, tmp_path, capsys):
        """Test an unreadable file is reported and the rest processed."""
        from hilicat.__main__ import main

        missing = tmp_path / "gone.go"

        assert main(["--config", str(config_file), str(missing), str(go_file)]) == 1

        captured = capsys.readouterr()
        assert "gone.go" in captured.err
        assert f"{CYAN}func{RESET}" in captured.out

    def test_unknown_lang(self, config_file, go_file, capsys):
        """Test an unconfigured --lang fails the file."""
        from hilicat.__main__ import main

        assert main(["--config", str(config_file), "--lang", "cobol", str(go_file)]) == 1
        assert "language not found: cobol" in capsys.readouterr().err

    def test_overlap_flag(self, tmp_path, capsys):
        """Test --overlap longest switches the overlap mode."""
        from hilicat.__main__ import main

        config = tmp_path / "overlap.json"
        config.write_text(json.dumps({
            "languages": {
                "demo": {
                    "extensions": ["demo"],
                    "rules": [
                        {"name": "short", "pattern": "foo", "style": "red"},
                        {"name": "long", "pattern": "foobar", "style": "green"},
                    ],
                }
            }
        }), encoding="utf-8")
        path = tmp_path / "x.demo"
        path.write_bytes(b"foobar\n")

        assert main(["--config", str(config), str(path)]) == 0
        assert capsys.readouterr().out == f"{RED}foo{RESET}bar\n"

        assert main(["--config", str(config), "--overlap", "longest", str(path)]) == 0
        assert capsys.readouterr().out == f"{GREEN}foobar{RESET}\n"

    def test_read_error_exit_status(self, config_file, go_file, monkeypatch, capsys):
        """Test a read failing part way exits 1 and keeps the lines already read."""
        from hilicat.__main__ import main
        from hilicat.streams.reader import ChunkReader
        from hilicat.utils.exceptions import StreamReadError

        def truncated(self, stream, name="stdin"):
            yield b"func a\n"
            raise StreamReadError(name, "Input/output error")

        monkeypatch.setattr(ChunkReader, "iter_chunks", truncated)

        assert main(["--config", str(config_file), str(go_file)]) == 1

        captured = capsys.readouterr()
        assert captured.out == f"{CYAN}func{RESET} a\n"
        assert "failed to read" in captured.err
        assert "main.go" in captured.err


class TestStdin:
    """Tests for reading standard input."""

    def test_stdin_requires_lang(self, config_file, monkeypatch, capsys):
        """Test stdin without --lang is an error."""
        from hilicat.__main__ import main

        fake_stdin(monkeypatch, b"func\n")

        assert main(["--config", str(config_file)]) == 1
        assert "--lang is required" in capsys.readouterr().err

    def test_stdin_with_lang(self, config_file, monkeypatch, capsys):
        """Test stdin is highlighted with the given language."""
        from hilicat.__main__ import main

        fake_stdin(monkeypatch, b"func main\n")

        assert main(["--config", str(config_file), "--lang", "go"]) == 0
        assert capsys.readouterr().out == f"{CYAN}func{RESET} main\n"

    def test_stdin_crlf_detection(self, config_file, monkeypatch, capsys):
        """Test line endings are detected on stdin without losing input."""
        from hilicat.__main__ import main

        fake_stdin(monkeypatch, b"a\r\nb\r\n")

        assert main(["--config", str(config_file), "--lang", "text", "-n"]) == 0
        assert capsys.readouterr().out == "    1  a\r\n    2  b\r\n"

    def test_stdin_forced_lf(self, config_file, monkeypatch, capsys):
        """Test --line-ending lf splits on LF only."""
        from hilicat.__main__ import main

        fake_stdin(monkeypatch, b"a\r\nb\r\n")

        assert main(
            ["--config", str(config_file), "--lang", "text", "--line-ending", "lf", "-E"]
        ) == 0
        assert capsys.readouterr().out == "a\r$\nb\r$\n"


class TestConfiguration:
    """Tests for configuration handling in the CLI."""

    def test_default_config_is_created(self, tmp_path, go_file, capsys):
        """Test a missing config file is created with the defaults and used."""
        from hilicat.__main__ import main

        config = tmp_path / "new" / "config.json"

        assert main(["--config", str(config), str(go_file)]) == 0
        assert config.is_file()
        assert f"{CYAN}package{RESET} main" in capsys.readouterr().out

    def test_config_env_override(self, tmp_path, go_file, monkeypatch, capsys):
        """Test HILICAT_CONFIG is used when --config is absent."""
        from hilicat.__main__ import main

        config = tmp_path / "env-config.json"
        monkeypatch.setenv("HILICAT_CONFIG", str(config))

        assert main([str(go_file)]) == 0
        assert config.is_file()

    def test_invalid_config(self, tmp_path, go_file, capsys):
        """Test a malformed config file aborts the run."""
        from hilicat.__main__ import main

        config = tmp_path / "config.json"
        config.write_text("{broken", encoding="utf-8")

        assert main(["--config", str(config), str(go_file)]) == 1

        captured = capsys.readouterr()
        assert "failed to parse config file" in captured.err
        assert captured.out == ""

    def test_bad_pattern_names_rule(self, tmp_path, go_file, capsys):
        """Test a malformed rule is reported with its name."""
        from hilicat.__main__ import main

        config = tmp_path / "config.json"
        config.write_text(json.dumps({
            "languages": {
                "go": {
                    "extensions": ["go"],
                    "rules": [{"name": "broken", "pattern": "(", "style": "red"}],
                }
            }
        }), encoding="utf-8")

        assert main(["--config", str(config), str(go_file)]) == 1
        assert "invalid regex pattern for broken" in capsys.readouterr().err


class TestArguments:
    """Tests for argument parsing."""

    def test_version(self, capsys):
        """Test --version prints the version and exits."""
        from hilicat.__main__ import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out

    def test_invalid_line_ending(self, capsys):
        """Test argparse rejects unknown line ending modes."""
        from hilicat.__main__ import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--line-ending", "cr"])
        assert exc_info.value.code == 2

    def test_build_options(self):
        """Test flags map onto Options."""
        from hilicat.__main__ import build_options, build_parser
        from hilicat.highlighter.line import OverlapMode

        args = build_parser().parse_args(["-n", "-s", "--overlap", "longest", "f.go"])
        options = build_options(args)

        assert options.number_lines
        assert options.squeeze_blank
        assert not options.number_nonblank
        assert not options.show_ends
        assert options.overlap is OverlapMode.LONGEST
        assert args.files == ["f.go"]

    def test_debug_flag(self, config_file, go_file, capsys):
        """Test --debug raises the console log level without touching stdout."""
        from hilicat.__main__ import main
        from hilicat.utils.logger import get_log_info

        assert main(["--debug", "--config", str(config_file), str(go_file)]) == 0
        assert get_log_info()["console_level"] == "DEBUG"

        captured = capsys.readouterr()
        assert "\033[36mfunc" in captured.out
        assert "hilicat" in captured.err
