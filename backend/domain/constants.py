from enum import Enum
from config import settings

DEFAULT_LIMIT = settings.DEFAULT_LIMIT

class SongOrder(str, Enum):
    """Columns a song listing may be ranked by (always descending)."""
    PLAY_COUNT = "play_count"
    DOWNLOAD_COUNT = "download_count"
    CREATED_AT = "created_at"

# Search field names accepted by SongListAppService.search
SEARCH_AUTHOR = "author"
SEARCH_NAME = "name"
SEARCH_USER = "user"
SEARCH_HASH = "hash"
SEARCH_SONG = "song"
SEARCH_ALL = "all"
