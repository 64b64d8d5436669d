"""SQLite-backed song library.

One ``songs`` table; list-valued fields (``artist``, ``tags``) are stored as
JSON arrays.  Older databases may hold a bare string in ``artist``; such rows
are read back as a one-element list.
"""

import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterable
from pathlib import Path

from .exceptions import SongNotFoundError, ValidationError
from .models import Song, SongFilter, SongType

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS songs (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    artist TEXT NOT NULL,
    type TEXT NOT NULL CHECK(type IN ('lyrics', 'chords', 'tabs')),
    key TEXT NOT NULL,
    tags TEXT NOT NULL,
    raw_file_url TEXT,
    extracted_text TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_title ON songs(title);
CREATE INDEX IF NOT EXISTS idx_artist ON songs(artist);
CREATE INDEX IF NOT EXISTS idx_type ON songs(type);
CREATE INDEX IF NOT EXISTS idx_key ON songs(key);
"""

_COLUMNS = (
    "id, title, artist, type, key, tags, raw_file_url, extracted_text, created_at, updated_at"
)

# Fields that update() accepts, mapped to their column names.
_UPDATABLE = {
    "title": "title",
    "artist": "artist",
    "type": "type",
    "key": "key",
    "tags": "tags",
    "extracted_text": "extracted_text",
    "raw_file_url": "raw_file_url",
}


def _now() -> int:
    return int(time.time() * 1000)


def _as_list(values: str | Iterable[str] | None) -> list[str]:
    """A bare string is one value, not a sequence of characters."""
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return [str(v) for v in values]


def _dump_list(values: str | Iterable[str] | None) -> str:
    return json.dumps(_as_list(values), ensure_ascii=False)


def _song_type(value: str | SongType) -> SongType:
    try:
        return SongType(value)
    except ValueError as exc:
        choices = ", ".join(t.value for t in SongType)
        raise ValidationError("type", f"{value!r} is not one of {choices}") from exc


def _load_artist(raw: str) -> list[str]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    if isinstance(value, list):
        return [str(v) for v in value]
    text = str(value)
    return [text] if text.strip() else []


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _require(field: str, value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(field, "must not be empty")
    return value


def _row_to_song(row: sqlite3.Row) -> Song:
    return Song(
        id=row["id"],
        title=row["title"],
        artist=_load_artist(row["artist"]),
        type=SongType(row["type"]),
        key=row["key"],
        tags=json.loads(row["tags"]),
        raw_file_url=row["raw_file_url"],
        extracted_text=row["extracted_text"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SongStore:
    """CRUD access to the songs table.

    Usage::

        with SongStore("songbook.db") as store:
            song = store.create("Amazing Grace", "G  C  G\\nAmazing grace")
            store.list(SongFilter(search="grace"))
    """

    def __init__(self, path: str | Path = ":memory:"):
        self.path = str(path)
        self._conn = sqlite3.connect(self.path)
        self._conn.row_factory = sqlite3.Row
        self.create_schema()

    def create_schema(self) -> None:
        with self._conn:
            self._conn.executescript(_SCHEMA)
        logger.debug("Database ready at %s", self.path)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SongStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(
        self,
        title: str,
        text: str,
        artist: str | Iterable[str] = (),
        type: SongType = SongType.CHORDS,
        key: str = "",
        tags: str | Iterable[str] = (),
        raw_file_url: str | None = None,
    ) -> Song:
        """Store a new song and return it.

        A single string for *artist* or *tags* counts as one entry.  Raises
        :class:`~songbook.exceptions.ValidationError` when the title
        or text is blank or *type* is not a :class:`SongType` value.
        """
        now = _now()
        song = Song(
            id=str(uuid.uuid4()),
            title=_require("title", title),
            extracted_text=_require("text", text),
            artist=_as_list(artist),
            type=_song_type(type),
            key=key or "",
            tags=_as_list(tags),
            raw_file_url=raw_file_url,
            created_at=now,
            updated_at=now,
        )
        with self._conn:
            self._conn.execute(
                f"INSERT INTO songs ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    song.id,
                    song.title,
                    _dump_list(song.artist),
                    song.type.value,
                    song.key,
                    _dump_list(song.tags),
                    song.raw_file_url,
                    song.extracted_text,
                    song.created_at,
                    song.updated_at,
                ),
            )
        logger.info("Created song %s (%r, %d chars)", song.id, song.title, len(song.extracted_text))
        return song

    def get_by_id(self, song_id: str) -> Song:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM songs WHERE id = ?", (song_id,)
        ).fetchone()
        if row is None:
            raise SongNotFoundError(song_id)
        return _row_to_song(row)

    def update(self, song_id: str, **changes) -> Song:
        """Change the given fields of a stored song and bump ``updated_at``.

        Accepted fields: title, artist, type, key, tags, extracted_text,
        raw_file_url.  Unknown fields raise ``TypeError``.
        """
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise TypeError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        self.get_by_id(song_id)  # raises SongNotFoundError

        values: dict[str, object] = {}
        for name, value in changes.items():
            if name == "title":
                value = _require("title", value)
            elif name == "extracted_text":
                value = _require("text", value)
            elif name in ("artist", "tags"):
                value = _dump_list(value)
            elif name == "type":
                value = _song_type(value).value
            elif name == "key":
                value = value or ""
            values[_UPDATABLE[name]] = value
        values["updated_at"] = _now()

        assignments = ", ".join(f"{col} = ?" for col in values)
        with self._conn:
            self._conn.execute(
                f"UPDATE songs SET {assignments} WHERE id = ?",
                (*values.values(), song_id),
            )
        logger.info("Updated song %s (%s)", song_id, ", ".join(sorted(changes)) or "touch")
        return self.get_by_id(song_id)

    def delete(self, song_id: str) -> None:
        with self._conn:
            cur = self._conn.execute("DELETE FROM songs WHERE id = ?", (song_id,))
        if cur.rowcount == 0:
            raise SongNotFoundError(song_id)
        logger.info("Deleted song %s", song_id)

    def list(self, song_filter: SongFilter | None = None) -> list[Song]:
        """Return matching songs, most recently updated first."""
        song_filter = song_filter or SongFilter()
        query = f"SELECT {_COLUMNS} FROM songs WHERE 1=1"
        params: list[object] = []

        if song_filter.search:
            term = f"%{_escape_like(song_filter.search)}%"
            query += (
                " AND (title LIKE ? ESCAPE '\\' OR artist LIKE ? ESCAPE '\\'"
                " OR extracted_text LIKE ? ESCAPE '\\')"
            )
            params.extend([term, term, term])
        if song_filter.type:
            query += " AND type = ?"
            params.append(SongType(song_filter.type).value)
        if song_filter.key:
            query += " AND key = ?"
            params.append(song_filter.key)

        query += " ORDER BY updated_at DESC, created_at DESC"
        songs = [_row_to_song(row) for row in self._conn.execute(query, params)]

        if song_filter.tags:
            wanted = set(song_filter.tags)
            songs = [s for s in songs if wanted.issubset(s.tags)]
        return songs
