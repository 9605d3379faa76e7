import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


class Settings(BaseSettings):
    env: str = "dev"
    data_dir: str = DEFAULT_DATA_DIR

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 60 * 24

    # Moderation thresholds
    shopper_warning_threshold: int = 3
    owner_report_threshold: int = 5
    pending_reports_limit: int = 50

    # Search origin when the caller sends no coordinates
    default_lat: float = 1.3016
    default_lng: float = 103.9056

    log_level: str = "INFO"
    log_file: str = ""

    cors_origins: str = "http://localhost:5173"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.env == "production"


settings = Settings()
