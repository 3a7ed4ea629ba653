from typing import List, Dict, Any, Iterable, Protocol
from sqlmodel import Session

from domain.models.song import Song, SongDetail, SongInfo, SongKey, User
from infra.repositories.song_list_repository import SongListRepository

class SongNotFoundError(ValueError):
    def __init__(self, key: SongKey):
        super().__init__(f"Song {key} could not be resolved.")
        self.key = key

class SongResolver(Protocol):
    """Turns the SongKeys produced by a listing into full song records."""

    def resolve(self, key: SongKey, api_format: bool = False) -> Dict[str, Any]:
        ...

    def resolve_many(self, keys: Iterable[SongKey], api_format: bool = False) -> List[Dict[str, Any]]:
        ...

def build_song_info(song: Song, detail: SongDetail, user: User | None) -> SongInfo:
    return SongInfo(
        key=str(SongKey(song.id, detail.id)),
        song_id=song.id,
        detail_id=detail.id,
        name=song.name,
        song_name=detail.song_name,
        song_sub_name=detail.song_sub_name or "",
        author_name=detail.author_name or "",
        hash_md5=detail.hash_md5 or "",
        play_count=detail.play_count or 0,
        download_count=detail.download_count or 0,
        uploader_id=song.user_id,
        uploader=user.name if user else None,
        created_at=detail.created_at,
    )

def format_song_info(info: SongInfo, api_format: bool = False) -> Dict[str, Any]:
    if api_format:
        return info.model_dump(by_alias=True, mode="json")
    return info.model_dump()

class SongDetailResolver:
    """
    Hydrates keys from the catalogue tables in a single query per batch.
    A key whose revision row is gone raises SongNotFoundError.
    """

    def __init__(self, session: Session):
        self.repository = SongListRepository(session)

    def resolve(self, key: SongKey, api_format: bool = False) -> Dict[str, Any]:
        return self.resolve_many([key], api_format)[0]

    def resolve_many(self, keys: Iterable[SongKey], api_format: bool = False) -> List[Dict[str, Any]]:
        keys = list(keys)
        rows = self.repository.get_songs_with_details(keys)

        results = []
        for key in keys:
            if key not in rows:
                raise SongNotFoundError(key)
            info = build_song_info(*rows[key])
            results.append(format_song_info(info, api_format))
        return results
