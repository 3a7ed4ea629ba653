import logging
import os
from logging.handlers import RotatingFileHandler
import sys

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def get_log_dir() -> str:
    # SONGLIST_LOG_DIR is exported by Settings.setup_environment() in deployed runs;
    # during development fall back to <backend>/logs
    return os.environ.get("SONGLIST_LOG_DIR") or os.path.join(BASE_DIR, "logs")

def get_log_level() -> int:
    # LOG_LEVEL is exported by Settings.setup_environment(), so .env values apply too
    name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)

def get_logger(name: str):
    """
    Return a logger writing to both a rotating file and the console.
    """
    logger = logging.getLogger(name)

    # handlers are attached once per logger name
    if not logger.handlers:
        level = get_log_level()
        logger.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)

        # 1. File handler (rotates every 10MB, keeps 5 generations)
        try:
            log_dir = get_log_dir()
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, "songlist.log"),
                maxBytes=10*1024*1024,
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            logger.addHandler(file_handler)
        except OSError as e:
            # read-only filesystems still get console output
            print(f"Failed to set up file logging: {e}", file=sys.stderr)

        # 2. Console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    return logger
