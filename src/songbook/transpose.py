"""Chord transposer.

Shifts every chord in a song by a whole number of semitones while leaving all
other characters (spacing, punctuation, lyrics, blank lines) untouched::

    >>> transpose("C G Am F\\n", 2)
    'D A Bm G\\n'

Results are always sharp-spelled.  Chords whose root cannot be mapped to a
pitch class (``E#``, ``Cb`` ...) are left exactly as written; nothing in this
module raises on bad input.
"""

from .chords import ChordToken, parse_chord, tokenize
from .notes import index_to_note, shift


def transpose_chord(chord: ChordToken | str, steps: int) -> str:
    """Return *chord* moved by *steps* semitones.

    *chord* may be a :class:`~songbook.chords.ChordToken` or a bare symbol.
    Strings that do not parse as a chord are returned unchanged.
    """
    token = parse_chord(chord) if isinstance(chord, str) else chord
    if token is None:
        return chord
    root = token.root_index
    if root is None:
        return token.text or token.name

    new_root = index_to_note(shift(root, steps))
    bass = ""
    if token.bass:
        bass_index = token.bass_index
        if bass_index is None:
            bass = f"/{token.bass}"
        else:
            bass = f"/{index_to_note(shift(bass_index, steps))}"
    return f"{new_root}{token.quality}{bass}"


def transpose_line(line: str, steps: int) -> str:
    """Transpose the chords of a single line (no ``\\n`` handling)."""
    tokens = tokenize(line)
    if not tokens:
        return line
    # Right to left, so earlier offsets stay valid as lengths change.
    for token in reversed(tokens):
        line = line[: token.start] + transpose_chord(token, steps) + line[token.end :]
    return line


def transpose(text: str, steps: int) -> str:
    """Transpose every chord in *text* by *steps* semitones."""
    if steps == 0:
        return text
    return "\n".join(transpose_line(line, steps) for line in text.split("\n"))


class Transposition:
    """Running transposition state for one open song.

    The base text is never modified; :attr:`text` is recomputed from it and
    the accumulated :attr:`steps`.
    """

    def __init__(self, text: str = "", steps: int = 0):
        self.base_text = text
        self.steps = steps

    @property
    def text(self) -> str:
        return transpose(self.base_text, self.steps)

    @property
    def label(self) -> str:
        """Offset as shown next to the +/- controls: ``0``, ``+2``, ``-1``."""
        return f"{self.steps:+d}" if self.steps else "0"

    def set_text(self, text: str) -> None:
        """Load a new song; the offset goes back to zero."""
        self.base_text = text
        self.steps = 0

    def up(self, steps: int = 1) -> str:
        self.steps += steps
        return self.text

    def down(self, steps: int = 1) -> str:
        self.steps -= steps
        return self.text

    def reset(self) -> str:
        self.steps = 0
        return self.text
