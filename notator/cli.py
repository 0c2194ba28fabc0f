"""Notator CLI entry point."""

import re
import sys
from pathlib import Path

import click

from notator import __version__
from notator.score_models import Cursor
from notator.staff import TREBLE_STEPS, Staff

_CURSOR_PATTERN = re.compile(r"^(\d+):(\d+)$")


def _parse_cursor(value: str | None, channel: int) -> Cursor | None:
    """Turn a ``MEASURE:INDEX`` option value into a cursor on *channel*."""
    if value is None:
        return None
    match = _CURSOR_PATTERN.match(value.strip())
    if not match:
        raise click.BadParameter("expected MEASURE:INDEX, e.g. 0:2", param_hint="--cursor")
    return Cursor(channel=channel, measure=int(match.group(1)), index=int(match.group(2)))


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="notator")
def main() -> None:
    """Notator: lays out scores as engraved staff notation."""


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("score_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file path. Defaults to the score path with the format's extension.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["svg", "html"], case_sensitive=False),
    default="svg",
    show_default=True,
    help="Output format: standalone SVG or HTML page with inline SVG.",
)
@click.option(
    "--title",
    default=None,
    metavar="TEXT",
    help="Title shown in HTML output. Defaults to the score's own title.",
)
@click.option("--channel", type=click.IntRange(min=0), default=0, show_default=True, help="Part to render.")
@click.option("--lines", type=click.IntRange(1, 11), default=5, show_default=True, help="Staff lines.")
@click.option(
    "--steps",
    type=int,
    default=TREBLE_STEPS,
    show_default=True,
    help="Staff steps from middle C to the middle line (6 treble, 0 alto, -6 bass).",
)
@click.option(
    "--cursor",
    default=None,
    metavar="MEASURE:INDEX",
    help="Highlight the marking at this position, e.g. 0:2.",
)
@click.option("--flags", is_flag=True, default=False, help="Draw flags on eighth notes and shorter.")
def render(
    score_file: str,
    output: str | None,
    output_format: str,
    title: str | None,
    channel: int,
    lines: int,
    steps: int,
    cursor: str | None,
    flags: bool,
) -> None:
    """
    Lay out one part of a score file and write it as SVG or HTML.

    SCORE_FILE is any file music21 can read (MusicXML, MIDI, ABC, ...).

    \b
    Examples:
      notator render song.musicxml
      notator render song.mid --format html -o song.html --title "My Song"
      notator render song.musicxml --steps -6 --channel 1 --cursor 0:2
    """
    from notator.sheet_exporter import SheetExporter

    score_path = Path(score_file)
    normalized_format = output_format.lower()
    resolved_output = output if output is not None else str(score_path.with_suffix(f".{normalized_format}"))
    edit_cursor = _parse_cursor(cursor, channel)

    click.echo(f"notator v{__version__}")
    click.echo(f"  Score  : {score_file}")
    click.echo(f"  Format : {normalized_format}")
    click.echo(f"  Staff  : {lines} lines, middle C {steps:+d} steps")
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    click.echo("[1/3] Parsing score with music21...")
    click.echo("[2/3] Laying out measures...")
    click.echo(f"[3/3] Writing {normalized_format.upper()} file...")

    exporter = SheetExporter(
        staff=Staff(lines=lines, steps=steps),
        output_format=normalized_format,
        title=title if title is not None else "",
        draw_flags=flags,
    )
    try:
        score = exporter.export(score_file, resolved_output, channel=channel, cursor=edit_cursor)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Could not render score — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"      Measures : {score.measure_count(channel)}")
    click.echo(f"Done!  Open '{resolved_output}' in any browser with a SMuFL font (e.g. Bravura) installed.")
