"""Split song text into chord and lyric segments for display."""

from dataclasses import dataclass

import click

from .chords import tokenize

CHORD_COLOR = "blue"


@dataclass
class Segment:
    """A run of characters within one line, either a chord or plain text."""

    text: str
    is_chord: bool = False


def segment_line(line: str) -> list[Segment]:
    """Return alternating lyric/chord segments that together spell *line*.

    A line with no chords yields one lyric segment (empty for a blank line).
    """
    segments: list[Segment] = []
    pos = 0
    for token in tokenize(line):
        if token.start > pos:
            segments.append(Segment(line[pos : token.start]))
        segments.append(Segment(token.text, is_chord=True))
        pos = token.end
    if pos < len(line) or not segments:
        segments.append(Segment(line[pos:]))
    return segments


def segment_text(text: str) -> list[list[Segment]]:
    """Segment each ``\\n``-separated line of *text*."""
    return [segment_line(line) for line in text.split("\n")]


def render(text: str, color: bool = True) -> str:
    """Return *text* with chords styled for a terminal.

    With ``color=False`` the text comes back unchanged.
    """
    if not color:
        return text
    lines = []
    for segments in segment_text(text):
        lines.append(
            "".join(
                click.style(seg.text, fg=CHORD_COLOR, bold=True) if seg.is_chord else seg.text
                for seg in segments
            )
        )
    return "\n".join(lines)
