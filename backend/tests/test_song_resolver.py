import pytest
from sqlmodel import Session
from domain.models.song import SongKey
from domain.services.song_resolver import SongDetailResolver, SongNotFoundError

def test_song_key_round_trip():
    key = SongKey(12, 40)
    assert str(key) == "12-40"
    assert SongKey.parse("12-40") == key

@pytest.mark.parametrize("value", ["", "12", "12-", "-40", "a-b", "12_40"])
def test_song_key_parse_rejects_garbage(value):
    with pytest.raises(ValueError):
        SongKey.parse(value)

def test_resolve_plain_and_api_format(session: Session, catalogue):
    catalogue.user(1, name="alice")
    song = catalogue.song(name="Neon")
    catalogue.revision(song, song_name="Old")
    detail = catalogue.revision(song, song_name="Neon Lights", song_sub_name="Extended", author_name="Kinetic",
                                hash_md5="feed", play_count=7, download_count=3)

    resolver = SongDetailResolver(session)
    key = SongKey(song.id, detail.id)

    plain = resolver.resolve(key)
    assert plain["key"] == f"{song.id}-{detail.id}"
    assert plain["song_name"] == "Neon Lights"
    assert plain["song_sub_name"] == "Extended"
    assert plain["play_count"] == 7
    assert plain["uploader"] == "alice"

    api = resolver.resolve(key, api_format=True)
    assert api["songName"] == "Neon Lights"
    assert api["authorName"] == "Kinetic"
    assert api["downloadCount"] == 3
    assert api["uploaderId"] == 1

def test_resolve_many_preserves_order(session: Session, catalogue):
    catalogue.user(1)
    keys = []
    for name in ["A", "B", "C"]:
        song = catalogue.song(name=name)
        detail = catalogue.revision(song)
        keys.append(SongKey(song.id, detail.id))

    resolved = SongDetailResolver(session).resolve_many(list(reversed(keys)))
    assert [s["name"] for s in resolved] == ["C", "B", "A"]

def test_resolve_without_user_row(session: Session, catalogue):
    song = catalogue.song(user_id=42, name="Nobody's")
    detail = catalogue.revision(song)

    info = SongDetailResolver(session).resolve(SongKey(song.id, detail.id))
    assert info["uploader"] is None
    assert info["uploader_id"] == 42

def test_unknown_key_raises(session: Session, catalogue):
    catalogue.user(1)
    song = catalogue.song()
    detail = catalogue.revision(song)
    resolver = SongDetailResolver(session)

    with pytest.raises(SongNotFoundError):
        resolver.resolve(SongKey(song.id, detail.id + 100))
    # revision exists but belongs to another song
    with pytest.raises(SongNotFoundError):
        resolver.resolve(SongKey(song.id + 1, detail.id))
