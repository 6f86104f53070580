from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    MEDIA_FOLDER: Path = Path("./static/media")
    MAX_UPLOAD_SIZE: int = 50 * 1024 * 1024

    MAX_CONTESTANTS: int = 60
    SLUG_SUFFIX_LENGTH: int = 6
    SLUG_MAX_ATTEMPTS: int = 5

    SERIALIZE_WRITES: bool = False

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
