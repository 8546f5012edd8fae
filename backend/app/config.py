from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./health_surveillance.db",
        env="DATABASE_URL",
    )
    db_echo: bool = Field(default=False, env="DB_ECHO")

    # Auth
    jwt_secret_key: str = Field(..., env="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", env="JWT_ALGORITHM")
    token_expire_hours: int = Field(default=24, env="TOKEN_EXPIRE_HOURS")
    bcrypt_rounds: int = Field(default=10, env="BCRYPT_ROUNDS")

    # File uploads
    upload_dir: str = Field(default="uploads", env="UPLOAD_DIR")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, env="MAX_UPLOAD_BYTES")

    # HTTP
    cors_origins: str = Field(default="*", env="CORS_ORIGINS")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_json: bool = Field(default=False, env="LOG_JSON")

    # Startup
    seed_sample_alerts: bool = Field(default=True, env="SEED_SAMPLE_ALERTS")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
