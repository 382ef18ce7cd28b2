"""Application configuration"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database
    database_url: str = "sqlite:///./catalog.db"
    database_echo: bool = False
    database_seed: bool = False  # Insert sample albums into an empty catalog on startup

    # API Configuration
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Server Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # Mail notification for newly created albums
    mail_enabled: bool = False
    mail_host: str = "localhost"
    mail_port: int = 25
    mail_sender: str = "catalog@localhost"
    mail_recipient: str = "admin@localhost"
    mail_timeout: float = 5.0

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
