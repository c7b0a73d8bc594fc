"""
Runtime Environment Validation Module

Validates engine configuration at application startup. If validation
fails, the application refuses to start (hard fail).

A bad taxonomy path or a mis-ordered weight table would otherwise only
surface as wrong compliance scores, long after startup.
"""

import os
import sys

from pydantic import ValidationError

from nspire.core.config import Settings
from nspire.models.enums import SeverityLevel


def check_settings(settings: Settings) -> list[str]:
    """Return a list of configuration problems (empty when valid)."""
    problems = []

    # 1. CORS: wildcard only allowed in debug mode
    if not settings.debug and "*" in settings.origins:
        problems.append(
            "Wildcard CORS origin (*) detected in production mode. "
            "Set ALLOWED_ORIGINS to specific domains (comma-separated)."
        )

    # 2. Taxonomy override must exist
    if settings.taxonomy_path and not os.path.exists(settings.taxonomy_path):
        problems.append(f"Taxonomy file not found: {settings.taxonomy_path}")

    # 3. Weights: non-negative and ordered by severity
    weights = settings.severity_weights
    for severity, weight in weights.items():
        if weight < 0:
            problems.append(f"Weight for {severity.value} must be >= 0, got {weight}")

    ordered = [
        SeverityLevel.LIFE_THREATENING,
        SeverityLevel.SEVERE,
        SeverityLevel.MODERATE,
        SeverityLevel.LOW,
    ]
    for worse, milder in zip(ordered, ordered[1:]):
        if weights[worse] < weights[milder]:
            problems.append(
                f"Weight for {worse.value} ({weights[worse]}) is lower than "
                f"weight for {milder.value} ({weights[milder]})"
            )

    return problems


def validate_environment() -> Settings:
    """
    Validate configuration at startup.

    Returns:
        Settings: Validated settings object

    Raises:
        SystemExit: If validation fails (exit code 1)
    """
    try:
        settings = Settings()
    except ValidationError as e:
        print("❌ FATAL: Environment validation failed", file=sys.stderr)
        print("\nMissing or invalid environment variables:", file=sys.stderr)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            print(f"   • {field}: {error['msg']}", file=sys.stderr)
        print("\nThe application cannot start with invalid configuration.", file=sys.stderr)
        sys.exit(1)

    problems = check_settings(settings)
    if problems:
        for problem in problems:
            print(f"❌ FATAL: {problem}", file=sys.stderr)
        sys.exit(1)

    print("✅ Environment validation passed")
    print(f"   App: {settings.app_name}")
    print(f"   Debug: {settings.debug}")
    print(f"   Scoring model: {settings.scoring_model.value}")
    print(f"   Taxonomy: {settings.taxonomy_path or 'packaged'}")

    return settings


if __name__ == "__main__":
    validate_environment()
    print("\n✅ All environment variables are valid!")
