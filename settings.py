"""
Centralized settings module for VenueContract.
Single source of truth for all configuration values.
"""

import os
from pathlib import Path
from typing import List, Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class VenueContractSettings:
    """Centralized configuration for the VenueContract service."""

    # Blueprint Configuration
    BLUEPRINTS_DIR: str = os.getenv(
        "VC_BLUEPRINTS_DIR", str(Path(__file__).resolve().parent / "blueprints")
    )

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("VC_LOG_LEVEL", "INFO")

    # AI response limits (mirrors what the generation prompt asks for)
    MAX_SECTIONS: int = int(os.getenv("VC_MAX_SECTIONS", "25"))
    MAX_EXHIBITS: int = int(os.getenv("VC_MAX_EXHIBITS", "10"))

    # API Configuration
    CORS_ORIGINS: str = os.getenv("VC_CORS_ORIGINS", "http://localhost:3000")
    API_ENABLE_TIMING_LOGS: bool = _env_flag("API_ENABLE_TIMING_LOGS", "true")

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """
        Split the comma separated CORS origin list.

        Returns:
            List[str]: Non-empty origins, whitespace trimmed
        """
        return [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]

    @classmethod
    def get_blueprints_dir(cls, override: Optional[str] = None) -> Path:
        """
        Resolve the blueprint directory with an optional per-call override.

        Args:
            override: Directory to use instead of the configured one.

        Returns:
            Path: Directory holding one YAML blueprint per contract type
        """
        return Path(override or cls.BLUEPRINTS_DIR)

# Create singleton instance
settings = VenueContractSettings()
