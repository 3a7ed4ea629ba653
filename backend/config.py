import os
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "SongList"
APP_AUTHOR = "SongListDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # platformdirs is the default location, DB_PATH from the environment wins
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None

    # Listing
    DEFAULT_LIMIT: int = 15

    # Logging
    SONGLIST_LOG_DIR: str | None = None
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "songlist.duckdb")

        if not self.SONGLIST_LOG_DIR:
            self.SONGLIST_LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """Export the logging settings so utils.logger picks them up."""
        if self.SONGLIST_LOG_DIR:
            os.environ["SONGLIST_LOG_DIR"] = self.SONGLIST_LOG_DIR
        if self.LOG_LEVEL:
            os.environ["LOG_LEVEL"] = self.LOG_LEVEL.upper()

settings = Settings()
