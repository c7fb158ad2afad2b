"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite+pysqlite:///./casa.db"
    DATABASE_ECHO: bool = False

    # Youth at or above this age without a recorded transition are flagged
    TRANSITION_AGE_YEARS: int = 14


settings = Settings()
