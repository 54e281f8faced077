import secrets
from pathlib import Path
from typing import Annotated, Any, Literal

from dotenv import load_dotenv
from pydantic import AnyUrl, BeforeValidator, RedisDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def parse_cors(v: Any) -> list[str]:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list):
        return v
    elif isinstance(v, str):
        return [v]
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    BASE_DIR: str = str(Path(__file__).resolve().parent.parent.parent.parent)

    APP_NAME: str = "Userhub"
    APP_DESCRIPTION: str = "Userhub account and authentication API"
    APP_VERSION: str = "0.1.0"
    DOMAIN: str = "localhost"
    PORT: str = "8000"
    V1_STR: str = "v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    AUTH_SECRET_KEY: str = secrets.token_hex(64)
    AUTH_TOKEN_MAX_AGE: int = 60 * 60 * 8  # 8 hours

    CACHE_DEFAULT_TTL: int = 3600
    CACHE_KEY_PREFIX: str = "userhub_cache"
    CACHE_MEMORY_MAX_SIZE: int = 1000
    CACHE_REDIS_DB: int = 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SERVER_URL(self) -> str:
        if self.ENVIRONMENT == "local":
            return f"http://{self.DOMAIN}:{self.PORT}"
        return f"https://{self.DOMAIN}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def API_V1_STR(self) -> str:
        return f"/api/{self.V1_STR}"

    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def CACHE_REDIS_URL(self) -> RedisDsn:
        if self.REDIS_PASSWORD:
            return RedisDsn.build(
                scheme="redis",
                host=self.REDIS_HOST,
                port=self.REDIS_PORT,
                password=self.REDIS_PASSWORD,
                path=f"{self.CACHE_REDIS_DB}",
            )

        return RedisDsn.build(
            scheme="redis",
            host=self.REDIS_HOST,
            port=self.REDIS_PORT,
            path=f"{self.CACHE_REDIS_DB}",
        )

    DOCSTORE_BACKEND: Literal["memory", "mongo"] = "memory"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "userhub"
    MONGO_TIMEOUT_MS: int = 5000
