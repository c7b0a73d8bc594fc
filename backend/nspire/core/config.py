"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from nspire.models.enums import ScoringModel, SeverityLevel


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "NSPIRE Compliance Engine"
    debug: bool = False
    api_v1_prefix: str = "/v1"
    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Taxonomy resource (packaged file when unset)
    taxonomy_path: Optional[str] = None

    # Scoring
    scoring_model: ScoringModel = ScoringModel.BASELINE
    weight_life_threatening: int = 20
    weight_severe: int = 10
    weight_moderate: int = 5
    weight_low: int = 1

    @property
    def severity_weights(self) -> dict[SeverityLevel, int]:
        """Baseline deduction per finding, keyed by severity."""
        return {
            SeverityLevel.LIFE_THREATENING: self.weight_life_threatening,
            SeverityLevel.SEVERE: self.weight_severe,
            SeverityLevel.MODERATE: self.weight_moderate,
            SeverityLevel.LOW: self.weight_low,
        }

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
