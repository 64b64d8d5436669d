from dataclasses import dataclass, field
from enum import Enum


class SongType(str, Enum):
    LYRICS = "lyrics"
    CHORDS = "chords"
    TABS = "tabs"


@dataclass
class Song:
    """A stored song.

    ``extracted_text`` holds the lyrics/chords exactly as pasted or extracted
    from an uploaded file; it is what gets highlighted and transposed.
    Timestamps are epoch milliseconds.
    """

    id: str
    title: str
    extracted_text: str
    artist: list[str] = field(default_factory=list)
    type: SongType = SongType.CHORDS
    key: str = ""  # e.g. "G", "C#m"; empty when unknown
    tags: list[str] = field(default_factory=list)
    raw_file_url: str | None = None
    created_at: int = 0
    updated_at: int = 0


@dataclass
class SongFilter:
    """Criteria for :meth:`~songbook.storage.SongStore.list`.

    Unset fields match everything.  ``search`` is a case-insensitive substring
    match on title, artists and text; every tag in ``tags`` must be present.
    """

    search: str | None = None
    type: SongType | None = None
    key: str | None = None
    tags: list[str] = field(default_factory=list)
