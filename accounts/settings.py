from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    smtp_base_url: str = "http://smtp-mock:8025"
    smtp_timeout_seconds: float = 10.0

    # Mail
    mail_from: str = "My App <info@my-app.com>"

    # Security / policies
    bcrypt_rounds: int = 10
    activation_token_bytes: int = 16

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
