# Pydantic settings

from pydantic_settings import BaseSettings, SettingsConfigDict
import os


class Settings(BaseSettings):
    """Application settings"""

    # App
    app_name: str = "Eventboard API"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 3000

    # Database (single embedded file)
    database_url: str = "sqlite+aiosqlite:///./eventboard.db"
    pool_size: int = 5
    pool_timeout: float = 30.0  # seconds to wait for a free connection

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        # Use .env.local if it exists (for local dev), otherwise .env
        env_file=".env.local" if os.path.exists(".env.local") else ".env",
        case_sensitive=False
    )


settings = Settings()
