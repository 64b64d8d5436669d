"""Pitch-class arithmetic for the 12-tone chromatic scale.

Pitch classes are integers in ``[0, 12)`` with ``0 == C``.  Output spelling is
always sharp/natural; flat spellings are accepted on input only.
"""

# Canonical spelling, index == pitch class.
NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# The five flat spellings, mapped explicitly.
FLAT_NOTES: dict[str, int] = {
    "Db": 1,
    "Eb": 3,
    "Gb": 6,
    "Ab": 8,
    "Bb": 10,
}

_NOTE_INDEX: dict[str, int] = {name: i for i, name in enumerate(NOTES)}
_NOTE_INDEX.update(FLAT_NOTES)


def note_to_index(name: str) -> int | None:
    """Return the pitch class for *name*, or ``None`` if it is not one of the
    17 recognised spellings (e.g. ``E#``, ``Cb``, ``H``)."""
    return _NOTE_INDEX.get(name)


def index_to_note(index: int) -> str:
    """Return the sharp-spelled name for *index*, taken modulo 12."""
    return NOTES[index % 12]


def shift(index: int, steps: int) -> int:
    """Move a pitch class by *steps* semitones, wrapping into ``[0, 12)``."""
    return (index + steps) % 12
