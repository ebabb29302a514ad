"""Application configuration management."""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Database Configuration
    database_url: str = Field(default="sqlite:///./jobs.db", description="SQLAlchemy database URL")
    run_migrations_on_startup: bool = Field(default=False, description="Apply Alembic migrations instead of create_all")
    
    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, description="API port")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")
    max_upload_size_mb: int = Field(default=10, description="Maximum CV upload size in MB")
    
    # AI Configuration
    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model name")
    use_search_grounding: bool = Field(default=True, description="Enable Google Search grounding tool")
    ai_timeout_seconds: float = Field(default=120.0, gt=0, description="Timeout for one AI call")
    ai_artificial_delay_seconds: float = Field(default=0.0, ge=0, description="Delay before each AI call")
    
    # Worker Configuration
    worker_enabled: bool = Field(default=True, description="Start the background worker with the API")
    poll_interval_seconds: float = Field(default=5.0, gt=0, description="Seconds between worker ticks")
    worker_drain_timeout_seconds: float = Field(default=30.0, ge=0, description="Max wait for in-flight job on shutdown")
    retention_days: Optional[int] = Field(default=None, ge=1, description="Purge finished jobs older than this")
    log_truncate_chars: int = Field(default=500, ge=0, description="Max chars of bad AI output to log")
    
    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    
    @property
    def max_upload_size_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


# Global settings instance
settings = Settings()
