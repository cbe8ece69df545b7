"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Application
    app_env: str = "dev"
    app_version: str = "1"
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Round secret material (random bytes, hex encoded)
    server_seed_bytes: int = 32
    nonce_bytes: int = 8

    # Round persistence
    rounds_log_dir: str = "round_logs"

    # In-memory round store; evicted rounds stay in the round log
    round_ttl_secs: int = 3600
    max_active_rounds: int = 10000

    # Admin authentication
    admin_username: str = "admin"
    # bcrypt hash for "admin123"
    admin_password_hash: str = "$2b$12$RZI94bkNCR6WZg6oF69WG.k8Wtp5C7E6amTtk6YOK3x1jrZtLGidu"
    jwt_secret: str = "your-secret-key-change-this-in-production"
    jwt_expiration_hours: int = 24

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
