from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="URLSHORT_", env_file=".env", extra="ignore")

    # Redirect source
    FILE_NAME: str = "targets.yaml"
    FILE_TYPE: str = "yaml"            # yaml | json | sqlite
    DB_QUERY_TIMEOUT_SEC: float = 5.0

    # Always-on table consulted after the file source misses
    DEFAULT_REDIRECTS: dict[str, str] = {
        "/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort",
        "/yaml-godoc": "https://godoc.org/gopkg.in/yaml.v2",
    }

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_DIR: str | None = None         # stdout only when unset
    LOG_LEVEL: str = "INFO"
    LOG_RETENTION_DAYS: int = 10


settings = Settings()
