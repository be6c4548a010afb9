"""Runtime settings for the DepPrep front ends."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from ``DEPPREP_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="DEPPREP_")

    log_level: str = "WARNING"
    grammar: str = "ruby"
    placeholder_version: str = "0.0.1"
    web_host: str = "0.0.0.0"
    web_port: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
