from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./calorics.db"
    dataset_path: str = "../dataset.csv"

    jwt_secret: str = "calorics-dev-secret"
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24

    cors_origins: List[str] = ["http://localhost:3000"]

    host: str = "0.0.0.0"
    port: int = 8080

    # IANA name, e.g. "Europe/Berlin"; unset means the server's local date
    timezone: Optional[str] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
