"""
Configuration module for the LearnPath backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")

    # JWT Verification - Supabase JWT Signing Keys (ES256 with JWKS)
    # Format: https://<project-id>.supabase.co/auth/v1/.well-known/jwks.json
    @property
    def SUPABASE_JWKS_URL(self) -> str:
        """Get the JWKS URL for JWT verification."""
        if not self.SUPABASE_URL:
            return ""
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))

    # Link reachability probe
    LINK_PROBE_TIMEOUT_SECONDS: float = float(os.getenv("LINK_PROBE_TIMEOUT_SECONDS", "3.0"))
    LINK_PROBE_MAX_REDIRECTS: int = int(os.getenv("LINK_PROBE_MAX_REDIRECTS", "5"))

    # Public URL of the dashboard (used for auth email redirects)
    SITE_URL: str = os.getenv("SITE_URL", "http://localhost:3000")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (comma separated, only read in production)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that the service can reach Supabase and that the link probe
        and model settings are usable.

        GOOGLE_API_KEY is optional: without it recommendations use the
        default set.

        Raises:
            ValueError: Listing every missing or out-of-range setting.
        """
        required_settings = {
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_PUBLISHABLE_KEY": cls.SUPABASE_PUBLISHABLE_KEY,
        }

        problems = [
            f"{key} is not set" for key, value in required_settings.items() if not value
        ]

        if cls.LINK_PROBE_TIMEOUT_SECONDS <= 0:
            problems.append("LINK_PROBE_TIMEOUT_SECONDS must be positive")
        if cls.LINK_PROBE_MAX_REDIRECTS < 0:
            problems.append("LINK_PROBE_MAX_REDIRECTS must not be negative")
        if not 0.0 <= cls.GEMINI_TEMPERATURE <= 2.0:
            problems.append("GEMINI_TEMPERATURE must be between 0 and 2")

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
