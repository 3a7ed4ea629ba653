from typing import List, Dict, Mapping, Tuple, Union
from sqlmodel import Session, select, or_, col
from sqlalchemy import func

from domain.models.song import Song, SongDetail, SongKey, User
from domain.constants import (
    SongOrder,
    DEFAULT_LIMIT,
    SEARCH_AUTHOR,
    SEARCH_NAME,
    SEARCH_USER,
    SEARCH_HASH,
    SEARCH_SONG,
    SEARCH_ALL,
)
from utils.logger import get_logger

logger = get_logger(__name__)

# Ranking column per SongOrder, read from the winning revision row
ORDER_COLUMNS = {
    SongOrder.PLAY_COUNT: col(SongDetail.play_count),
    SongOrder.DOWNLOAD_COUNT: col(SongDetail.download_count),
    SongOrder.CREATED_AT: col(SongDetail.created_at),
}

# Search field -> columns; several columns are OR'ed together
SEARCHABLE_COLUMNS = {
    SEARCH_AUTHOR: (col(SongDetail.author_name),),
    SEARCH_NAME: (col(Song.name),),
    SEARCH_USER: (col(User.name),),
    SEARCH_HASH: (col(SongDetail.hash_md5),),
    SEARCH_SONG: (col(SongDetail.song_name), col(SongDetail.song_sub_name)),
    SEARCH_ALL: (
        col(SongDetail.song_name),
        col(SongDetail.song_sub_name),
        col(SongDetail.author_name),
        col(Song.name),
        col(User.name),
    ),
}

class SongListRepository:
    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def is_searchable(field: str) -> bool:
        return field in SEARCHABLE_COLUMNS

    def count_songs(self) -> int:
        """Every song row, deleted or not."""
        return self.session.exec(select(func.count()).select_from(Song)).one()

    def count_user_songs(self, user_id: int) -> int:
        query = (
            select(func.count())
            .select_from(Song)
            .where(Song.user_id == user_id, col(Song.deleted_at).is_(None))
        )
        return self.session.exec(query).one()

    def _latest_details(self):
        """song_id -> id of the newest revision that is not soft-deleted"""
        return (
            select(SongDetail.song_id, func.max(SongDetail.id).label("detail_id"))
            .where(col(SongDetail.deleted_at).is_(None))
            .group_by(SongDetail.song_id)
            .subquery("latest")
        )

    def prepare_query(self, order: Union[SongOrder, str], offset: int, limit: int):
        """
        Base query shared by every song list: one row per non-deleted song,
        carrying only its SongKey columns (song_id, detail_id).

        Ranking reads ``order`` from the winning revision itself, so a deleted
        or superseded revision never influences the position of its song.
        The order column comes from ORDER_COLUMNS only; anything outside
        SongOrder fails here with ValueError.
        """
        order_column = ORDER_COLUMNS[SongOrder(order)]
        latest = self._latest_details()

        return (
            select(latest.c.song_id, latest.c.detail_id)
            .select_from(latest)
            .join(SongDetail, SongDetail.id == latest.c.detail_id)
            .join(Song, Song.id == latest.c.song_id)
            .where(col(Song.deleted_at).is_(None))
            .order_by(order_column.desc(), latest.c.detail_id.desc())
            .offset(offset)
            .limit(limit)
        )

    def _fetch_keys(self, query) -> List[SongKey]:
        rows = self.session.exec(query).all()
        return [SongKey(song_id, detail_id) for song_id, detail_id in rows]

    def list_song_keys(self, order: SongOrder, offset: int = 0, limit: int = DEFAULT_LIMIT) -> List[SongKey]:
        return self._fetch_keys(self.prepare_query(order, offset, limit))

    def list_user_song_keys(
        self,
        user_id: int,
        order: SongOrder = SongOrder.CREATED_AT,
        offset: int = 0,
        limit: int = DEFAULT_LIMIT
    ) -> List[SongKey]:
        # outer join: a missing user row still passes the deleted_at filter
        query = (
            self.prepare_query(order, offset, limit)
            .outerjoin(User, User.id == Song.user_id)
            .where(col(User.deleted_at).is_(None))
            .where(Song.user_id == user_id)
        )
        return self._fetch_keys(query)

    def _apply_search_conditions(self, query, filters: Mapping[str, str]) -> Tuple[object, int]:
        """AND across fields, OR across the columns of one field."""
        applied = 0
        for field, term in filters.items():
            columns = SEARCHABLE_COLUMNS.get(field)
            if columns is None:
                logger.debug(f"Ignoring unknown search field '{field}'")
                continue
            pattern = f"%{term}%"
            query = query.where(or_(*[column.ilike(pattern) for column in columns]))
            applied += 1
        return query, applied

    def search_song_keys(self, filters: Mapping[str, str], offset: int = 0, limit: int = DEFAULT_LIMIT) -> List[SongKey]:
        """
        Newest-first search. Returns an empty list when no field of
        ``filters`` is searchable; that is "no search", not "match all".
        """
        query = (
            self.prepare_query(SongOrder.CREATED_AT, offset, limit)
            .outerjoin(User, User.id == Song.user_id)
        )
        query, applied = self._apply_search_conditions(query, filters)
        if not applied:
            return []
        return self._fetch_keys(query)

    def get_songs_with_details(self, keys: List[SongKey]) -> Dict[SongKey, Tuple[Song, SongDetail, User]]:
        """Load song, revision and uploader rows for a batch of keys."""
        if not keys:
            return {}
        detail_ids = [key.detail_id for key in keys]
        query = (
            select(Song, SongDetail, User)
            .select_from(Song)
            .join(SongDetail, SongDetail.song_id == Song.id)
            .outerjoin(User, User.id == Song.user_id)
            .where(col(SongDetail.id).in_(detail_ids))
        )
        found = {}
        for song, detail, user in self.session.exec(query).all():
            found[SongKey(song.id, detail.id)] = (song, detail, user)
        return found
