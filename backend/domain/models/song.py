from typing import Optional
from dataclasses import dataclass
from datetime import datetime
from sqlmodel import Field, SQLModel
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = Field(default=None)

class Song(SQLModel, table=True):
    __tablename__ = "songs"
    """
    A logical song. Rows are soft-deleted through deleted_at, never removed.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    name: str
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = Field(default=None)

class SongDetail(SQLModel, table=True):
    __tablename__ = "song_details"
    """
    One revision of a song. The highest id among the non-deleted revisions
    is the current one.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    song_id: int = Field(index=True)

    # Metadata
    song_name: str
    song_sub_name: str = Field(default="")
    author_name: str = Field(default="")
    hash_md5: str = Field(default="")

    # Metrics
    play_count: int = Field(default=0)
    download_count: int = Field(default=0)

    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = Field(default=None)

@dataclass(frozen=True)
class SongKey:
    """Song id paired with the id of its winning revision, e.g. ``"12-40"``."""
    song_id: int
    detail_id: int

    SEPARATOR = "-"

    def __str__(self) -> str:
        return f"{self.song_id}{self.SEPARATOR}{self.detail_id}"

    @classmethod
    def parse(cls, value: str) -> "SongKey":
        song_id, sep, detail_id = value.partition(cls.SEPARATOR)
        if not sep or not song_id.isdigit() or not detail_id.isdigit():
            raise ValueError(f"Malformed song key: {value!r}")
        return cls(int(song_id), int(detail_id))

class SongInfo(BaseModel):
    """
    Hydrated song: the song row, its current revision and the uploader.
    Dumped with camelCase aliases for API consumers.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    song_id: int
    detail_id: int
    name: str
    song_name: str
    song_sub_name: str = ""
    author_name: str = ""
    hash_md5: str = ""
    play_count: int = 0
    download_count: int = 0
    uploader_id: int
    uploader: Optional[str] = None
    created_at: datetime
