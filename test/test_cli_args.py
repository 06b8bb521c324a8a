"""Basic CLI argument wiring tests."""
import io

import pytest

from tafsir_markup.segmenter.cli import main, parse_args


def test_cli_text_argument():
    args = parse_args(["--text", "Before «نص» after."])
    assert args.text == "Before «نص» after."
    assert args.file is None
    assert args.segments is False
    assert args.quiet is False


def test_cli_text_and_file_are_exclusive(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(SystemExit):
        parse_args(["--text", "x", "--file", str(path)])


def test_cli_missing_file_errors(tmp_path):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--file", str(tmp_path / "missing.txt")])
    assert exc.value.code == 2


def test_cli_prints_markup(capsys):
    main(["--text", "Before «Arabic text» after.", "-q"])
    out = capsys.readouterr().out.strip()
    assert out == "<p>Before</p><arabic>Arabic text</arabic><p>after.</p>"


def test_cli_prints_segments(capsys):
    main(["--text", "Before «Arabic text» after.", "-q", "--segments"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "[0] PROSE: Before",
        "[1] SCRIPT_QUOTE: Arabic text",
        "[2] PROSE: after.",
    ]


def test_cli_reads_file(tmp_path, capsys):
    path = tmp_path / "in.txt"
    path.write_text("<p>One. Two.</p>", encoding="utf-8")
    main(["--file", str(path), "-q"])
    assert capsys.readouterr().out.strip() == "<p>One.</p><p>Two.</p>"


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Hello."))
    main(["-q"])
    assert capsys.readouterr().out.strip() == "<p>Hello.</p>"


def test_cli_banner_by_default(capsys):
    main(["--text", "Hello."])
    out = capsys.readouterr().out
    assert "Tafsir Markup CLI" in out
    assert out.strip().endswith("<p>Hello.</p>")
