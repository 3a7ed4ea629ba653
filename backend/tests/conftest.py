import os
import pytest
import sys
import tempfile
import uuid
from datetime import datetime, timedelta
from typing import Generator
from sqlmodel import Session, create_engine

# 1. Path setup: put the backend directory on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# keep config/logging away from the real user data directory
TEST_DATA_DIR = os.path.join(tempfile.gettempdir(), "songlist_tests")
os.environ.setdefault("DB_PATH", os.path.join(TEST_DATA_DIR, "songlist_default.duckdb"))
os.environ.setdefault("SONGLIST_LOG_DIR", os.path.join(TEST_DATA_DIR, "logs"))

import infra.database.connection as db_connection
from infra.database.schema import init_raw_db
from domain.models.song import User, Song, SongDetail

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)

@pytest.fixture(name="session", scope="function")
def session_fixture() -> Generator[Session, None, None]:
    """
    Every test gets its own DuckDB file with the catalogue schema.
    """
    test_db_path = os.path.join(tempfile.gettempdir(), f"songlist_test_{uuid.uuid4()}.duckdb")

    engine = create_engine(f"duckdb:///{test_db_path}")

    # swap the module-level engine used by get_session()
    db_connection.engine = engine
    db_connection.DB_PATH = test_db_path
    db_connection.DATABASE_URL = f"duckdb:///{test_db_path}"

    init_raw_db(engine)

    with Session(engine) as session:
        yield session

    engine.dispose()
    if os.path.exists(test_db_path):
        try:
            os.remove(test_db_path)
        except OSError:
            pass

class CatalogueBuilder:
    """Small helper for inserting users, songs and revisions with explicit ids."""

    def __init__(self, session: Session):
        self.session = session
        self._next_song_id = 1
        self._next_detail_id = 1

    def user(self, user_id: int, name: str = "uploader", deleted: bool = False) -> User:
        user = User(id=user_id, name=name, deleted_at=BASE_TIME if deleted else None)
        self.session.add(user)
        self.session.commit()
        return user

    def song(self, user_id: int = 1, name: str = "Song", day: int = 0, deleted: bool = False) -> Song:
        song = Song(
            id=self._next_song_id,
            user_id=user_id,
            name=name,
            created_at=BASE_TIME + timedelta(days=day),
            deleted_at=BASE_TIME if deleted else None,
        )
        self._next_song_id += 1
        self.session.add(song)
        self.session.commit()
        return song

    def revision(
        self,
        song: Song,
        song_name: str = "Title",
        song_sub_name: str = "",
        author_name: str = "Author",
        hash_md5: str = "",
        play_count: int = 0,
        download_count: int = 0,
        day: int = 0,
        deleted: bool = False,
    ) -> SongDetail:
        detail = SongDetail(
            id=self._next_detail_id,
            song_id=song.id,
            song_name=song_name,
            song_sub_name=song_sub_name,
            author_name=author_name,
            hash_md5=hash_md5 or f"hash{self._next_detail_id:04d}",
            play_count=play_count,
            download_count=download_count,
            created_at=BASE_TIME + timedelta(days=day),
            deleted_at=BASE_TIME if deleted else None,
        )
        self._next_detail_id += 1
        self.session.add(detail)
        self.session.commit()
        return detail

@pytest.fixture(name="catalogue")
def catalogue_fixture(session: Session) -> CatalogueBuilder:
    return CatalogueBuilder(session)
