from typing import List, Optional, Dict, Any, Mapping
from sqlmodel import Session

from domain.constants import SongOrder, DEFAULT_LIMIT
from domain.models.song import SongKey
from domain.services.song_resolver import SongResolver, SongDetailResolver
from infra.repositories.song_list_repository import SongListRepository
from utils.logger import get_logger

logger = get_logger(__name__)

class SongListAppService:
    """
    Read-only song listings. Every list holds one entry per song, built from
    its newest non-deleted revision and hydrated through ``resolver``.
    """

    def __init__(self, session: Session, resolver: Optional[SongResolver] = None):
        self.session = session
        self.repository = SongListRepository(session)
        self.resolver = resolver or SongDetailResolver(session)

    def _check_window(self, offset: int, limit: int):
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

    def _prepare_song_info(self, keys: List[SongKey], api_format: bool) -> List[Dict[str, Any]]:
        if not keys:
            return []
        return self.resolver.resolve_many(keys, api_format)

    def _list(self, order: SongOrder, offset: int, limit: int, api_format: bool) -> List[Dict[str, Any]]:
        self._check_window(offset, limit)
        keys = self.repository.list_song_keys(order, offset, limit)
        logger.debug(f"Listing by {order.value}: offset={offset} limit={limit} -> {len(keys)} songs")
        return self._prepare_song_info(keys, api_format)

    def get_song_count(self) -> int:
        return self.repository.count_songs()

    def get_user_song_count(self, user_id: int) -> int:
        return self.repository.count_user_songs(user_id)

    def search(
        self,
        parameters: Mapping[str, str],
        offset: int = 0,
        limit: int = DEFAULT_LIMIT,
        api_format: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Substring search over the whitelisted fields, newest songs first.

        Fields are AND'ed; an empty mapping or one without any known field
        yields an empty list instead of the whole catalogue.
        """
        if not parameters:
            return []

        filters = {field: term for field, term in parameters.items() if self.repository.is_searchable(field)}
        if not filters:
            logger.info(f"Search skipped, no searchable field in {sorted(parameters)}")
            return []

        self._check_window(offset, limit)
        keys = self.repository.search_song_keys(filters, offset, limit)
        logger.debug(f"Search {filters}: offset={offset} limit={limit} -> {len(keys)} songs")
        return self._prepare_song_info(keys, api_format)

    def get_top_played_songs(self, offset: int = 0, limit: int = DEFAULT_LIMIT, api_format: bool = False) -> List[Dict[str, Any]]:
        return self._list(SongOrder.PLAY_COUNT, offset, limit, api_format)

    def get_top_downloaded_songs(self, offset: int = 0, limit: int = DEFAULT_LIMIT, api_format: bool = False) -> List[Dict[str, Any]]:
        return self._list(SongOrder.DOWNLOAD_COUNT, offset, limit, api_format)

    def get_newest_songs(self, offset: int = 0, limit: int = DEFAULT_LIMIT, api_format: bool = False) -> List[Dict[str, Any]]:
        return self._list(SongOrder.CREATED_AT, offset, limit, api_format)

    def get_songs_by_user(
        self,
        user_id: int,
        offset: int = 0,
        limit: int = DEFAULT_LIMIT,
        api_format: bool = False
    ) -> List[Dict[str, Any]]:
        """Songs uploaded by ``user_id``, newest first; empty if that user is soft-deleted."""
        self._check_window(offset, limit)
        keys = self.repository.list_user_song_keys(user_id, SongOrder.CREATED_AT, offset, limit)
        return self._prepare_song_info(keys, api_format)
