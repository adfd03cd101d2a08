"""Runtime settings, overridable through ``COMMENT_MINER_*`` environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_FILE_SIZE = 1024 * 1024
DEFAULT_PARSE_TIMEOUT = 5.0


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COMMENT_MINER_", extra="ignore")

    max_file_size: int = Field(default=MAX_FILE_SIZE, gt=0)
    parse_timeout: float = Field(default=DEFAULT_PARSE_TIMEOUT, gt=0)
    workers: int = Field(default=8, ge=1)

    enrich_commit_dates: bool = True
    git_concurrency: int = Field(default=8, ge=1)
    git_timeout: float = Field(default=5.0, gt=0)

    classifier_url: str = "http://127.0.0.1:5000"
    classifier_timeout: float = Field(default=60.0, gt=0)

    store_relpath: str = ".vscode/commentsInfo.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
