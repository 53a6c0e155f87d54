"""Application settings."""

from functools import lru_cache
from typing import Annotated

from pydantic import AfterValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def invalid_empty(v: str) -> str:
    """An empty string is not a valid input.

    Args:
        v (str): input string.

    Returns:
        str: the input string

    """
    if v == "":
        raise ValueError("Empty string is not a valid value")
    return v


class Settings(BaseSettings):
    """Settings for the storage resolution layer."""

    LOG_LEVEL: Annotated[
        str,
        Field(default="INFO", description="Log level of the package logger."),
        AfterValidator(invalid_empty),
    ]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Retrieve cached settings.

    Returns:
        Settings: Cached settings value.

    """
    return Settings()
