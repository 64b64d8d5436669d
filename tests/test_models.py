from songbook.models import Song, SongFilter, SongType


def test_song_defaults():
    song = Song(id="1", title="Amazing Grace", extracted_text="G C G")
    assert song.artist == []
    assert song.type is SongType.CHORDS
    assert song.key == ""
    assert song.tags == []
    assert song.raw_file_url is None


def test_song_all_fields():
    song = Song(
        id="1",
        title="Amazing Grace",
        extracted_text="G C G",
        artist=["John Newton"],
        type=SongType.LYRICS,
        key="G",
        tags=["hymn"],
        raw_file_url="grace.pdf",
        created_at=10,
        updated_at=20,
    )
    assert song.artist == ["John Newton"]
    assert song.type is SongType.LYRICS
    assert song.key == "G"
    assert song.tags == ["hymn"]
    assert song.raw_file_url == "grace.pdf"
    assert (song.created_at, song.updated_at) == (10, 20)


def test_song_type_values():
    assert [t.value for t in SongType] == ["lyrics", "chords", "tabs"]
    assert SongType("tabs") is SongType.TABS


def test_filter_defaults_match_everything():
    song_filter = SongFilter()
    assert song_filter.search is None
    assert song_filter.type is None
    assert song_filter.key is None
    assert song_filter.tags == []
