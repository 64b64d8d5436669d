"""Chord-aware songbook: find, highlight and transpose chords in song text."""

from .chords import ChordToken, tokenize
from .transpose import transpose

__version__ = "0.1.0"

__all__ = ["ChordToken", "tokenize", "transpose", "__version__"]
