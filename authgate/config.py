"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start and handed to the app factory. Instances
    are frozen; the signing secret and work factor never change for the
    lifetime of a process.
    """

    database_path: str = "./data/authgate.db"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_algorithm: str = "HS256"
    # None means tokens carry no exp claim and stay valid until the secret changes
    jwt_expiry_seconds: int | None = None

    # Bcrypt work factor (higher = more secure but slower)
    # 12 is a good balance for security and performance
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    # Security Configuration
    # For testing: treat every request as non-localhost (admin bootstrap)
    bypass_localhost_check: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
    )
