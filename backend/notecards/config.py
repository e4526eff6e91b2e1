from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".notecards" / "data"
    sqlite_filename: str = "notecards.db"
    session_batch_size: int = 20
    activity_window_days: int = 30
    streak_max_days: int = 365
    weekly_goal_days: int = 3  # active days needed in the trailing week
    cors_origins: list[str] = ["*"]
    log_level: str = "info"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_prefix": "NOTECARDS_"}


settings = Settings()
