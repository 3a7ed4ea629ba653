from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

CURRENT_SCHEMA_VERSION = 1

def get_db_schema_sql() -> str:
    """
    Tables backing the song catalogue.

    DuckDB rejects UPDATEs on rows referenced by a FOREIGN KEY, so relations
    are kept as plain indexed columns.
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_users_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_songs_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_song_details_id START 1;

    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_users_id'),
        name VARCHAR NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        deleted_at TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS songs (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_songs_id'),
        user_id INTEGER NOT NULL,
        name VARCHAR NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        deleted_at TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS song_details (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_song_details_id'),
        song_id INTEGER NOT NULL,
        song_name VARCHAR NOT NULL,
        song_sub_name VARCHAR DEFAULT '',
        author_name VARCHAR DEFAULT '',
        hash_md5 VARCHAR DEFAULT '',
        play_count INTEGER DEFAULT 0,
        download_count INTEGER DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        deleted_at TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_songs_user_id ON songs (user_id);
    CREATE INDEX IF NOT EXISTS idx_song_details_song_id ON song_details (song_id);

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    result = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'"))
    row = result.fetchone()
    return int(row[0]) if row else 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = :version
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing DuckDB schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < CURRENT_SCHEMA_VERSION:
                set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise
