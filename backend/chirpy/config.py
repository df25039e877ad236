"""Application configuration."""
from collections import Counter
from functools import lru_cache
import math
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

HMAC_ALGORITHMS = {"HS256", "HS384", "HS512"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Chirpy"
    debug: bool = False
    platform: str = "prod"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Database
    database_url: str = "sqlite:///./chirpy.db"

    # Auth
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_seconds: int = 3600
    access_token_max_expire_seconds: int = 3600
    refresh_token_expire_days: int = 60
    bcrypt_rounds: int = 12

    # Webhooks
    polka_key: str

    # Paths
    base_dir: Path = Path(__file__).parent
    filepath_root: Path = base_dir / "static"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Fail closed if SECRET_KEY is weak or placeholder quality."""
        if not value:
            raise ValueError("SECRET_KEY must be set.")

        if len(value) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")

        weak_values = {"changeme", "changeme-in-production", "secret", "password", "test"}
        lowered = value.lower()
        if lowered in weak_values or "changeme" in lowered:
            raise ValueError("SECRET_KEY must not be a placeholder value.")

        counts = Counter(value)
        entropy_per_char = -sum((count / len(value)) * math.log2(count / len(value)) for count in counts.values())
        estimated_entropy_bits = entropy_per_char * len(value)
        if estimated_entropy_bits < 100:
            raise ValueError("SECRET_KEY entropy is too low; use a cryptographically random value.")

        return value

    @field_validator("polka_key")
    @classmethod
    def validate_polka_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("POLKA_KEY must be set.")
        return value

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        """Access tokens are HMAC-signed; asymmetric or 'none' algorithms are refused."""
        if value not in HMAC_ALGORITHMS:
            raise ValueError(f"ALGORITHM must be one of {sorted(HMAC_ALGORITHMS)}.")
        return value

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31.")
        return value

    @field_validator("access_token_expire_seconds", "access_token_max_expire_seconds", "refresh_token_expire_days")
    @classmethod
    def validate_positive_lifetime(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Token lifetimes must be positive.")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
