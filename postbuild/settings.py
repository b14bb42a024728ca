from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Sources
    CONTENT_DIR: str = "content/posts"
    SOURCE_SUFFIX: str = ".md"

    # Output
    DIST_DIR: str = "dist"
    SEARCH_INDEX_FILENAME: str = "search.json"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def search_index_path(self) -> Path:
        return Path(self.DIST_DIR) / self.SEARCH_INDEX_FILENAME


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
