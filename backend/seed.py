import sys
import os

# Add the current directory to sys.path to ensure imports work correctly
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

# Export the log settings before anything imports utils.logger
from config import settings
settings.setup_environment()

from sqlmodel import Session
from infra.database.connection import engine, init_db
from app.services.song_list_app_service import SongListAppService
from utils.seeding import seed_demo_catalogue
from utils.logger import get_logger

logger = get_logger(__name__)

def main():
    logger.info("Starting demo catalogue seeding...")
    try:
        init_db()
        with Session(engine) as session:
            seed_demo_catalogue(session)

            service = SongListAppService(session)
            logger.info(f"Songs on file: {service.get_song_count()}")
            for song in service.get_newest_songs(api_format=True):
                logger.info(f"newest: {song['key']} {song['songName']} by {song['authorName']}")
            for song in service.get_top_played_songs(api_format=True):
                logger.info(f"top played: {song['key']} {song['songName']} ({song['playCount']} plays)")
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
