from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".sonoglyph" / "data"
    sqlite_filename: str = "sonoglyph.db"
    history_limit: int = 50  # most recent generations kept
    max_sessions: int = 100
    log_level: str = "warning"

    model_config = {"env_prefix": "SONOGLYPH_"}


settings = Settings()
