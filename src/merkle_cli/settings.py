from __future__ import annotations
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    log_level: str = Field(default="WARNING", alias="MERKLE_LOG_LEVEL")

    # Elements file loaded by the interactive shell at start-up
    elements_path: Optional[str] = Field(default=None, alias="MERKLE_ELEMENTS_PATH")
    hash_elements: bool = Field(default=False, alias="MERKLE_HASH_ELEMENTS")

    max_elements: int = Field(default=1_000_000, alias="MERKLE_MAX_ELEMENTS")


def get_settings() -> Settings:
    """Fresh settings read from the current environment."""
    return Settings()
