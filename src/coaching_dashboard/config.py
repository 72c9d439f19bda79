"""Application configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


@dataclass(frozen=True)
class RemoteConfig:
    """Credentials for the remote day store."""

    url: str | None = None
    key: str | None = None

    def is_configured(self) -> bool:
        """Return True when both the endpoint and the access key are set."""
        return bool(self.url and self.url.strip()) and bool(
            self.key and self.key.strip()
        )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    local_cache_path: Path = Path(".coaching_dashboard/cache.json")
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def remote_config(self) -> RemoteConfig:
        """Return the remote store credentials as an explicit struct."""
        return RemoteConfig(url=self.supabase_url, key=self.supabase_anon_key)
