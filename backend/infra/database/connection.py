from sqlmodel import create_engine, Session
import os
import threading
from config import settings
from infra.database.schema import init_raw_db
from utils.logger import get_logger

logger = get_logger(__name__)

DB_PATH = settings.DB_PATH
os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)

DATABASE_URL = f"duckdb:///{DB_PATH}"

connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
engine = create_engine(
    DATABASE_URL,
    pool_size=5,
    max_overflow=10,
    echo=settings.SQL_ECHO,
    connect_args=connect_args
)

db_lock = threading.RLock()

def init_db():
    """
    Create the catalogue tables if they are missing.
    """
    with db_lock:
        logger.info(f"Using database at {DB_PATH}")
        init_raw_db(engine)

def close_db():
    engine.dispose()

def get_session():
    with Session(engine) as session:
        yield session
