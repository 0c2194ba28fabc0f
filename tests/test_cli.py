"""Unit tests for the command line interface."""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from notator import __version__
from notator.cli import _parse_cursor, main
from notator.score_models import Cursor


def test_version_option() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_help_lists_options() -> None:
    result = CliRunner().invoke(main, ["render", "--help"])
    assert result.exit_code == 0
    for option in ("--format", "--cursor", "--steps", "--lines", "--flags"):
        assert option in result.output


def test_render_requires_existing_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["render", str(tmp_path / "missing.musicxml")])
    assert result.exit_code != 0


def test_parse_cursor() -> None:
    assert _parse_cursor("1:3", channel=2) == Cursor(channel=2, measure=1, index=3)
    assert _parse_cursor(None, channel=0) is None


def test_parse_cursor_rejects_bad_values() -> None:
    with pytest.raises(click.BadParameter):
        _parse_cursor("first", channel=0)


def test_render_bad_cursor_is_a_usage_error(tmp_path: Path) -> None:
    source = tmp_path / "song.musicxml"
    source.write_text("<score-partwise/>", encoding="utf-8")
    result = CliRunner().invoke(main, ["render", str(source), "--cursor", "x"])
    assert result.exit_code == 2


def test_render_unreadable_score_exits_with_error(tmp_path: Path) -> None:
    pytest.importorskip("music21")
    source = tmp_path / "song.unknownformat"
    source.write_text("not a score", encoding="utf-8")
    result = CliRunner().invoke(main, ["render", str(source)])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_render_writes_html(tmp_path: Path) -> None:
    music21 = pytest.importorskip("music21")
    source = tmp_path / "song.musicxml"
    stream = music21.stream.Stream()
    stream.append(music21.note.Note("G4", quarterLength=1))
    stream.append(music21.note.Rest(quarterLength=3))
    stream.write("musicxml", fp=str(source))

    out = tmp_path / "out.html"
    result = CliRunner().invoke(
        main,
        ["render", str(source), "--format", "html", "-o", str(out), "--title", "Song", "--cursor", "0:0"],
    )

    assert result.exit_code == 0, result.output
    assert "Done!" in result.output
    content = out.read_text(encoding="utf-8")
    assert "<title>Song</title>" in content
    assert "fill='#ff9af0'" in content
