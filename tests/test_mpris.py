import pytest

from barblocks.mpris import PlayerMetadata, parse_metadata


def test_full_metadata():
    meta = parse_metadata(
        {
            "xesam:title": "Song",
            "xesam:artist": ["Band", "Guest"],
            "xesam:url": "file:///music/song.ogg",
        }
    )
    assert meta == PlayerMetadata("Song", "Band", "file:///music/song.ogg")


def test_empty_mapping_gives_nothing():
    assert parse_metadata({}) == PlayerMetadata(None, None, None)


@pytest.mark.parametrize("key", ["xesam:title", "xesam:url"])
def test_empty_strings_are_missing(key):
    meta = parse_metadata({key: ""})
    assert meta == PlayerMetadata()


def test_non_string_title_is_missing():
    meta = parse_metadata({"xesam:title": 42, "xesam:url": ["a"]})
    assert meta.title is None
    assert meta.url is None


def test_artist_must_be_a_list():
    assert parse_metadata({"xesam:artist": "Band"}).artist is None


def test_empty_artist_list_and_empty_first_artist():
    assert parse_metadata({"xesam:artist": []}).artist is None
    assert parse_metadata({"xesam:artist": ["", "Other"]}).artist is None


def test_artist_tuple_accepted():
    assert parse_metadata({"xesam:artist": ("Solo",)}).artist == "Solo"


def test_unrelated_keys_ignored():
    meta = parse_metadata({"mpris:length": 1000, "xesam:title": "Only"})
    assert meta == PlayerMetadata(title="Only")