"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Credentials and repository identity for the Bitbucket client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BITBUCKET_",
        extra="ignore",
    )

    username: str | None = None
    password: str | None = None  # password or app token
    owner: str | None = None
    repository: str | None = None
    key: str = "jenkins"
    name: str = "Jenkins"


class ProxySettings(BaseSettings):
    """Outbound proxy configuration shared by every client in the process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BITBUCKET_PROXY_",
        env_ignore_empty=True,
        extra="ignore",
    )

    host: str | None = None
    port: int = 8080
    username: str | None = None
    password: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_proxy_settings() -> ProxySettings:
    """Read proxy settings. Not cached: the environment may change between requests."""
    return ProxySettings()
