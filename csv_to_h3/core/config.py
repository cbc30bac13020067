"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # H3
    h3_resolution: int = 7

    # Export
    include_coordinates: bool = True

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "CSV_TO_H3_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
