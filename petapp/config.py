from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_file: str = Field(default="server.log", alias="LOG_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")
    shutdown_timeout_seconds: int = Field(default=10, alias="SHUTDOWN_TIMEOUT_SECONDS")

    @property
    def log_path(self) -> Path | None:
        if not self.log_file:
            return None
        return Path(self.log_file)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
