from abc import ABC, abstractmethod
from pathlib import Path


class Extractor(ABC):
    """Abstract base class for all text extractors."""

    # Lower-case file suffixes this extractor reads, e.g. (".txt",).
    suffixes: tuple[str, ...] = ()

    @classmethod
    def can_handle(cls, source: str) -> bool:
        """Return True if this extractor can read *source*.

        The default matches on file suffix; URL-based extractors override it.
        """
        return Path(source).suffix.lower() in cls.suffixes

    @abstractmethod
    def extract(self, source: str) -> str:
        """Return the song text contained in *source*.

        Line breaks and spacing must be kept as they appear in the source so
        that chords stay aligned above their lyrics.

        Raises ExtractionError if the source cannot be read.
        """
