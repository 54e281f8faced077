from typing import Literal

from .base import Settings as BaseSettings


class Settings(BaseSettings):
    """Settings to use on a developer machine. Cache and store live in process."""

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
