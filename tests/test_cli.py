from unittest.mock import patch

import pytest
from click.testing import CliRunner

from songbook.cli import main
from songbook.exceptions import FetchError
from songbook.storage import SongStore

SHEET = "G        C        G\nAmazing grace, how sweet the sound\n"


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "songs.db")


def _run(*args, **kwargs):
    return CliRunner().invoke(main, list(args), **kwargs)


def _add(db, *args, text=SHEET):
    result = _run("--db", db, "add", "-", *args, input=text)
    assert result.exit_code == 0, result.output
    return result.output.strip()


# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = _run("--help")
    assert result.exit_code == 0
    assert "Songbook" in result.output
    assert "transpose" in result.output


# ---------------------------------------------------------------------------
# transpose
# ---------------------------------------------------------------------------


def test_transpose_stdin():
    result = _run("transpose", "-", "--steps", "2", input="C G Am F\n")
    assert result.exit_code == 0
    assert result.output == "D A Bm G\n"


def test_transpose_negative_steps():
    result = _run("transpose", "-", "-s", "-1", input="Cmaj7 D/F#\n")
    assert result.output == "Bmaj7 C#/F\n"


def test_transpose_file_to_output(tmp_path):
    src = tmp_path / "grace.txt"
    src.write_text(SHEET, encoding="utf-8")
    dest = tmp_path / "out.txt"
    result = _run("transpose", str(src), "-s", "2", "-o", str(dest))
    assert result.exit_code == 0
    assert dest.read_text(encoding="utf-8") == (
        "A        D        A\nAmazing grace, how sweet the sound\n"
    )


def test_transpose_requires_steps():
    result = _run("transpose", "-", input="C")
    assert result.exit_code != 0


def test_transpose_unsupported_file(tmp_path):
    result = _run("transpose", str(tmp_path / "photo.jpg"), "-s", "1")
    assert result.exit_code == 1
    assert "Error" in result.output


def test_fetch_failure_message():
    with patch("songbook.cli.extract_text", side_effect=FetchError("https://example.com", 0)):
        result = _run("transpose", "https://example.com", "-s", "1")
    assert result.exit_code == 1
    assert "Could not fetch https://example.com" in result.output


def test_fetch_http_status_in_message():
    with patch("songbook.cli.extract_text", side_effect=FetchError("https://example.com", 404)):
        result = _run("chords", "https://example.com")
    assert result.exit_code == 1
    assert "404" in result.output


# ---------------------------------------------------------------------------
# chords / show
# ---------------------------------------------------------------------------


def test_chords_lists_unique_sorted():
    result = _run("chords", "-", input="G C G\nAmazing grace\nD7 G\n")
    assert result.exit_code == 0
    assert result.output == "C\nD7\nG\n"


def test_show_plain():
    result = _run("show", "-", "--no-color", "-s", "2", input="C   G   \nAmazing grace\n")
    assert result.exit_code == 0
    assert result.output == "D   A\nAmazing grace\n"


def test_show_adds_newline_only_when_missing():
    result = _run("show", "-", "--no-color", input="C   G")
    assert result.output == "C   G\n"


def test_show_colors_chords():
    result = _run("show", "-", input="C grace", color=True)
    assert result.exit_code == 0
    assert "\x1b[" in result.output
    assert "grace" in result.output


# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------


def test_add_and_get(db):
    song_id = _add(db, "-t", "Amazing Grace", "-a", "John Newton", "-k", "G", "--tag", "hymn")
    result = _run("--db", db, "get", song_id, "--no-color")
    assert result.exit_code == 0
    assert "Amazing Grace" in result.output
    assert "John Newton" in result.output
    assert "key: G" in result.output
    assert "tags: hymn" in result.output
    assert "Amazing grace, how sweet the sound" in result.output


def test_add_records_source(db, tmp_path):
    src = tmp_path / "grace.txt"
    src.write_text(SHEET, encoding="utf-8")
    result = _run("--db", db, "add", str(src), "-t", "Grace")
    song_id = result.output.strip()
    with SongStore(db) as store:
        song = store.get_by_id(song_id)
    assert song.raw_file_url == str(src)
    assert song.extracted_text == SHEET.strip()


def test_add_requires_text(db):
    result = _run("--db", db, "add", "-", "-t", "Empty", input="   \n")
    assert result.exit_code == 1
    assert "Error: Invalid text" in result.output


def test_get_transposed_shows_new_key(db):
    song_id = _add(db, "-t", "Grace", "-k", "G")
    result = _run("--db", db, "get", song_id, "-s", "2", "--no-color")
    assert "key: A" in result.output
    assert "transposed: +2" in result.output
    assert "A        D        A" in result.output


def test_get_output_ends_with_single_newline(db):
    song_id = _add(db, "-t", "Grace", "-k", "G")
    result = _run("--db", db, "get", song_id, "-s", "-1", "--no-color")
    assert result.output.endswith("F#        B        F#\nAmazing grace, how sweet the sound\n")
    assert "transposed: -1" in result.output
    assert not result.output.endswith("\n\n")


def test_get_missing(db):
    result = _run("--db", db, "get", "nope")
    assert result.exit_code == 1
    assert "Song not found: nope" in result.output


def test_list_filters(db):
    _add(db, "-t", "Amazing Grace", "--tag", "hymn")
    _add(db, "-t", "Rocky Top", "--type", "tabs", text="G  C\nRocky top\n")
    result = _run("--db", db, "list")
    assert "Amazing Grace" in result.output
    assert "Rocky Top" in result.output

    result = _run("--db", db, "list", "--type", "tabs")
    assert "Rocky Top" in result.output
    assert "Amazing Grace" not in result.output

    result = _run("--db", db, "list", "--tag", "hymn", "-q", "grace")
    assert result.output.count("\n") == 1
    assert "Amazing Grace" in result.output


def test_db_from_environment(db):
    result = _run("add", "-", "-t", "Env Song", input=SHEET, env={"SONGBOOK_DB": db})
    assert result.exit_code == 0
    assert "Env Song" in _run("--db", db, "list").output


def test_edit_fields(db):
    song_id = _add(db, "-t", "Grace")
    result = _run("--db", db, "edit", song_id, "-t", "Amazing Grace", "--tag", "hymn")
    assert result.exit_code == 0
    with SongStore(db) as store:
        song = store.get_by_id(song_id)
    assert song.title == "Amazing Grace"
    assert song.tags == ["hymn"]


def test_edit_transpose_rewrites_text_and_key(db):
    song_id = _add(db, "-t", "Grace", "-k", "G")
    result = _run("--db", db, "edit", song_id, "--transpose", "-2")
    assert result.exit_code == 0
    with SongStore(db) as store:
        song = store.get_by_id(song_id)
    assert song.key == "F"
    assert song.extracted_text.startswith("F        A#        F")


def test_edit_missing(db):
    result = _run("--db", db, "edit", "nope", "-t", "x")
    assert result.exit_code == 1


def test_delete(db):
    song_id = _add(db, "-t", "Grace")
    result = _run("--db", db, "delete", song_id)
    assert result.exit_code == 0
    assert _run("--db", db, "list").output == ""
    assert _run("--db", db, "delete", song_id).exit_code == 1
