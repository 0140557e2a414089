from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    akamai_host: str = "https://localhost"
    akamai_edgerc_path: str = "~/.edgerc"
    akamai_edgerc_section: str = "default"

    post_purge_enabled: bool = False
    post_purge_headers: dict[str, str] = {}
    post_purge_delay_seconds: float = 5.0

    request_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
