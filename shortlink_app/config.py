from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = True
    
    # Application
    app_name: str = "Short Link Service"
    app_version: str = "1.0.0"
    
    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    
    # Database
    database_url: str = "sqlite:///./shortlinks.db"
    
    # Short links
    base_url: str = "http://127.0.0.1:8080"
    short_code_length: int = 6
    max_retries: int = 10  # Attempts before creation gives up
    
    # Prepend default_scheme to URLs without http:// or https://
    normalize_urls: bool = True
    default_scheme: str = "https://"
    
    # 301 (permanent) by default, 302/307/308 also accepted
    redirect_status_code: int = 301
    
    # CORS
    cors_allow_origins: List[str] = ["*"]
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("redirect_status_code")
    @classmethod
    def check_redirect_status(cls, value: int) -> int:
        if value not in (301, 302, 307, 308):
            raise ValueError(f"redirect_status_code must be a redirect status, got {value}")
        return value

    @field_validator("short_code_length", "max_retries")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


# Create settings instance
settings = Settings()
