"""
Configuration settings for the position ledger

Loads environment variables and provides library/script configuration.
"""
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Ledger settings"""

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("CLMM_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = os.getenv(
        "CLMM_LOG_FORMAT",
        "%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Replay Configuration
    REPLAY_STOP_ON_ERROR: bool = os.getenv("CLMM_REPLAY_STOP_ON_ERROR", "True").lower() == "true"

    def get_log_level(self) -> int:
        """Resolve LOG_LEVEL to a logging level, falling back to WARNING"""
        level = logging.getLevelName(self.LOG_LEVEL)
        return level if isinstance(level, int) else logging.WARNING


# Create global settings instance
settings = Settings()


def configure_logging(level: str = None) -> None:
    """Configure root logging from settings (scripts only, never on import)"""
    if level is not None:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        resolved = settings.get_log_level()
    logging.basicConfig(level=resolved, format=settings.LOG_FORMAT)
