from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # SQLite by default; PostgreSQL works too, e.g.
    # postgresql+psycopg2://postgres@localhost/biztime
    DATABASE_URL: str = "sqlite:///./biztime.db"
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
