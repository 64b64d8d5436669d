"""Chord tokenizer.

Finds chord symbols embedded in free-form song text:

    "Amazing Grace in G"   ->  [G]
    "C   G/B  Am7,  F"     ->  [C, G/B, Am7, F]

A chord is a root (``A``-``G`` plus optional ``#``/``b``), an optional quality
suffix from :data:`QUALITIES` and an optional ``/bass`` note.  A match must not
touch a word character on either side, so capitalised words such as "This" or
"Amazing" are never read as chords.  A match may not stop just before a ``#``
either, so an accidental is never split off its note (``C#/D`` is one chord,
``C#`` + ``#`` is none).
"""

import re
from dataclasses import dataclass

from .notes import note_to_index

# Closed set of recognised quality suffixes.  "" is the plain major triad.
QUALITIES: tuple[str, ...] = ("", "m", "maj7", "m7", "7", "sus2", "sus4", "dim", "aug", "add9", "9", "11", "13")

# Longest suffix first so that "Cmaj7" is never read as "C" + "m" + "aj7".
_QUALITY_PAT = "|".join(re.escape(q) for q in sorted(QUALITIES, key=len, reverse=True) if q)

_ROOT_PAT = r"[A-G][#b]?"

_CHORD_PAT = (
    rf"(?P<root>{_ROOT_PAT})"
    rf"(?P<quality>{_QUALITY_PAT})?"
    rf"(?:/(?P<bass>{_ROOT_PAT}))?"
)

# Boundary rule: not preceded by a word character, not followed by a word
# character or an accidental.
CHORD_RE = re.compile(rf"(?<!\w){_CHORD_PAT}(?![\w#])")

_FULL_CHORD_RE = re.compile(rf"{_CHORD_PAT}")


@dataclass(frozen=True)
class ChordToken:
    """A chord symbol found in a line of text.

    ``start``/``end`` are offsets into the scanned line; ``text`` is the exact
    substring ``line[start:end]``.
    """

    root: str
    quality: str = ""
    bass: str | None = None
    start: int = 0
    end: int = 0
    text: str = ""

    @property
    def root_index(self) -> int | None:
        return note_to_index(self.root)

    @property
    def bass_index(self) -> int | None:
        return note_to_index(self.bass) if self.bass else None

    @property
    def name(self) -> str:
        """The chord symbol rebuilt from its parts, e.g. ``"Cmaj7/G"``."""
        bass = f"/{self.bass}" if self.bass else ""
        return f"{self.root}{self.quality}{bass}"


def _token(m: re.Match) -> ChordToken:
    return ChordToken(
        root=m.group("root"),
        quality=m.group("quality") or "",
        bass=m.group("bass"),
        start=m.start(),
        end=m.end(),
        text=m.group(),
    )


def tokenize(line: str) -> list[ChordToken]:
    """Return every chord in *line*, left to right.

    Each call builds a fresh list; no scanner state survives between calls.
    An empty list means the line holds no chord-shaped token.
    """
    return [_token(m) for m in CHORD_RE.finditer(line)]


def parse_chord(symbol: str) -> ChordToken | None:
    """Parse a standalone chord symbol such as ``"Db7"`` or ``"C/G"``.

    Returns ``None`` unless the whole of *symbol* is a chord.
    """
    m = _FULL_CHORD_RE.fullmatch(symbol)
    return _token(m) if m else None


def is_valid_chord(symbol: str) -> bool:
    return parse_chord(symbol) is not None


def extract_chords(text: str) -> list[str]:
    """Return the distinct chord symbols used anywhere in *text*, sorted."""
    found = {token.text for line in text.split("\n") for token in tokenize(line)}
    return sorted(found)
