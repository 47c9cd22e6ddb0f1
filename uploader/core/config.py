"""
Core configuration settings
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="UPLOADER_", extra="ignore")

    # Basic settings
    app_name: str = "Uploader"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./uploader.db"

    # Storage
    storage_path: str = "./storage"
    hash_chunk_size: int = 2048

    # R2 bucket, only needed when a field is configured with the R2 backend
    r2_bucket: Optional[str] = None
    r2_endpoint: Optional[str] = None
    r2_access_key: Optional[str] = None
    r2_secret_key: Optional[str] = None


settings = Settings()
