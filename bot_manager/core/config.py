from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Trading Bot Manager"
    debug: bool = True

    # Database
    database_url: str = "sqlite:///./data/trading_bots.db"

    # Session / auth
    secret_key: str = "change-me-in-production"
    session_cookie: str = "bot_manager_session"

    # CORS; empty means same-origin only
    cors_origins: List[str] = []

    # Asset search
    asset_search_delay: float = 1.0  # seconds

    # Logging
    log_level: str = "INFO"

    # API Settings
    api_v1_str: str = "/api/v1"


settings = Settings()
