from __future__ import annotations

from functools import lru_cache
from urllib.parse import quote

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Initializer settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Tic Tac Toe DB"
    app_env: str = "development"
    app_log_level: str = "INFO"
    app_log_json: bool = True

    # If set, this value has priority over component-based database settings.
    database_url: str = ""

    # MongoDB components
    db_host: str = "localhost"
    db_port: int = 27017
    db_name: str = "tic_tac_toe"
    db_user: str = ""
    db_password: str = ""
    db_auth_source: str = "admin"

    # Driver runtime tuning
    db_server_selection_timeout_ms: int = 5000
    db_connect_timeout_ms: int = 5000

    schema_update_validators: bool = False

    @computed_field
    @property
    def mongodb_uri(self) -> str:
        if self.database_url.strip():
            return self.database_url.strip()
        credentials = ""
        if self.db_user:
            credentials = quote(self.db_user, safe="")
            if self.db_password:
                credentials += f":{quote(self.db_password, safe='')}"
            credentials += "@"
        return (
            f"mongodb://{credentials}{self.db_host}:{self.db_port}/{self.db_name}"
            f"?authSource={quote(self.db_auth_source, safe='')}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
