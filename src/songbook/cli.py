import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from .chords import extract_chords
from .exceptions import FetchError, SongbookError
from .formatting import clean_text, format_for_display
from .highlight import render
from .models import Song, SongFilter, SongType
from .registry import extract_text
from .storage import SongStore
from .transpose import Transposition, transpose

DEFAULT_DB = "songbook.db"

_SONG_TYPES = click.Choice([t.value for t in SongType])


def _fail(exc: SongbookError) -> NoReturn:
    msg = f"Error: {exc}"
    if isinstance(exc, FetchError) and exc.status_code == 0:
        msg = f"Error: Could not fetch {exc.url}"
    click.echo(msg, err=True)
    sys.exit(1)


def _read_source(source: str) -> str:
    """Return the text of a file, URL, or ``-`` for stdin."""
    if source == "-":
        return click.get_text_stream("stdin").read()
    return extract_text(source)


def _echo_text(text: str) -> None:
    click.echo(text, nl=not text.endswith("\n"))


def _write_or_echo(text: str, output_path: str | None) -> None:
    if output_path:
        Path(output_path).write_text(text, encoding="utf-8")
        click.echo(f"Written to {output_path}")
    else:
        _echo_text(text)


def _render_view(view: Transposition, color: bool) -> None:
    _echo_text(render(format_for_display(view.text), color=color))


def _open_store(ctx: click.Context) -> SongStore:
    store = SongStore(ctx.obj["db"])
    ctx.call_on_close(store.close)
    return store


def _song_header(song: Song, view: Transposition) -> list[str]:
    lines = [song.title]
    if song.artist:
        lines.append(", ".join(song.artist))
    details = [f"type: {song.type.value}"]
    if song.key:
        details.append(f"key: {transpose(song.key, view.steps)}")
    if view.steps:
        details.append(f"transposed: {view.label}")
    if song.tags:
        details.append("tags: " + ", ".join(song.tags))
    lines.append("  ".join(details))
    return lines


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--db", "db_path", default=DEFAULT_DB, show_default=True, envvar="SONGBOOK_DB",
              metavar="PATH", help="Song library database (env: SONGBOOK_DB).")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, db_path: str, verbose: bool) -> None:
    """Songbook: store chord sheets, highlight and transpose their chords.

    \b
    SOURCE may be a .txt/.cho, .html, .pdf or .docx file,
    an http(s) URL, or - to read from stdin.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["db"] = db_path


# ---------------------------------------------------------------------------
# Text commands
# ---------------------------------------------------------------------------


@main.command("transpose")
@click.argument("source")
@click.option("-s", "--steps", type=int, required=True, help="Semitones to shift (negative = down).")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write the result to PATH instead of stdout.")
def transpose_cmd(source: str, steps: int, output_path: str | None) -> None:
    """Transpose every chord in SOURCE by STEPS semitones."""
    try:
        text = _read_source(source)
    except SongbookError as exc:
        _fail(exc)
    _write_or_echo(transpose(text, steps), output_path)


@main.command("chords")
@click.argument("source")
def chords_cmd(source: str) -> None:
    """List the distinct chords used in SOURCE."""
    try:
        text = _read_source(source)
    except SongbookError as exc:
        _fail(exc)
    for chord in extract_chords(text):
        click.echo(chord)


@main.command("show")
@click.argument("source")
@click.option("-s", "--steps", type=int, default=0, show_default=True, help="Transpose before showing.")
@click.option("--color/--no-color", default=True, help="Highlight chords.")
def show_cmd(source: str, steps: int, color: bool) -> None:
    """Print SOURCE with its chords highlighted."""
    try:
        text = _read_source(source)
    except SongbookError as exc:
        _fail(exc)
    _render_view(Transposition(text, steps), color)


# ---------------------------------------------------------------------------
# Library commands
# ---------------------------------------------------------------------------


@main.command("add")
@click.argument("source")
@click.option("-t", "--title", required=True, help="Song title.")
@click.option("-a", "--artist", "artists", multiple=True, help="Artist (repeatable).")
@click.option("--type", "song_type", type=_SONG_TYPES, default=SongType.CHORDS.value, show_default=True)
@click.option("-k", "--key", default="", help="Musical key, e.g. G or C#m.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    source: str,
    title: str,
    artists: tuple[str, ...],
    song_type: str,
    key: str,
    tags: tuple[str, ...],
) -> None:
    """Extract the text of SOURCE and store it as a new song."""
    store = _open_store(ctx)
    try:
        text = clean_text(_read_source(source))
        song = store.create(
            title,
            text,
            artist=artists,
            type=SongType(song_type),
            key=key,
            tags=tags,
            raw_file_url=None if source == "-" else source,
        )
    except SongbookError as exc:
        _fail(exc)
    click.echo(song.id)


@main.command("list")
@click.option("-q", "--search", default=None, help="Match title, artist or text.")
@click.option("--type", "song_type", type=_SONG_TYPES, default=None)
@click.option("-k", "--key", default=None)
@click.option("--tag", "tags", multiple=True, help="Require tag (repeatable).")
@click.pass_context
def list_cmd(
    ctx: click.Context,
    search: str | None,
    song_type: str | None,
    key: str | None,
    tags: tuple[str, ...],
) -> None:
    """List stored songs, most recently updated first."""
    store = _open_store(ctx)
    song_filter = SongFilter(
        search=search,
        type=SongType(song_type) if song_type else None,
        key=key,
        tags=list(tags),
    )
    for song in store.list(song_filter):
        click.echo("\t".join([song.id, song.title, ", ".join(song.artist), song.key]))


@main.command("get")
@click.argument("song_id")
@click.option("-s", "--steps", type=int, default=0, show_default=True, help="Transpose before showing.")
@click.option("--color/--no-color", default=True, help="Highlight chords.")
@click.pass_context
def get_cmd(ctx: click.Context, song_id: str, steps: int, color: bool) -> None:
    """Show a stored song."""
    store = _open_store(ctx)
    try:
        song = store.get_by_id(song_id)
    except SongbookError as exc:
        _fail(exc)
    view = Transposition(song.extracted_text, steps)
    for line in _song_header(song, view):
        click.echo(line)
    click.echo("")
    _render_view(view, color)


@main.command("edit")
@click.argument("song_id")
@click.option("-t", "--title", default=None)
@click.option("-a", "--artist", "artists", multiple=True, help="Replace artists (repeatable).")
@click.option("--type", "song_type", type=_SONG_TYPES, default=None)
@click.option("-k", "--key", default=None)
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable).")
@click.option("--transpose", "steps", type=int, default=0,
              help="Rewrite the stored chords (and key) by this many semitones.")
@click.pass_context
def edit_cmd(
    ctx: click.Context,
    song_id: str,
    title: str | None,
    artists: tuple[str, ...],
    song_type: str | None,
    key: str | None,
    tags: tuple[str, ...],
    steps: int,
) -> None:
    """Change fields of a stored song."""
    store = _open_store(ctx)
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = title
    if artists:
        changes["artist"] = list(artists)
    if song_type:
        changes["type"] = SongType(song_type)
    if key is not None:
        changes["key"] = key
    if tags:
        changes["tags"] = list(tags)
    try:
        if steps:
            song = store.get_by_id(song_id)
            changes["extracted_text"] = transpose(song.extracted_text, steps)
            changes["key"] = transpose(changes.get("key", song.key), steps)
        song = store.update(song_id, **changes)
    except SongbookError as exc:
        _fail(exc)
    click.echo(f"Updated {song.id}")


@main.command("delete")
@click.argument("song_id")
@click.pass_context
def delete_cmd(ctx: click.Context, song_id: str) -> None:
    """Delete a stored song."""
    store = _open_store(ctx)
    try:
        store.delete(song_id)
    except SongbookError as exc:
        _fail(exc)
    click.echo(f"Deleted {song_id}")
