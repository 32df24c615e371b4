"""
Configuration management for docgate
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DOCGATE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Document store
    store_backend: str = "memory"  # 'memory', 'sql'
    database_url: str = "sqlite+aiosqlite:///./docgate.db"
    sql_echo: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8088
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    graphiql: bool = True

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
