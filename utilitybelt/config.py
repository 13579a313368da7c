"""
Application configuration module.
Loads environment variables and provides toolkit-wide settings.
"""
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get project root (one level up from the package)
PROJECT_ROOT = Path(__file__).parent.parent

# Global flag to indicate test mode (set via set_test_mode() or UTILITYBELT_TEST_MODE env var)
_test_mode = os.environ.get("UTILITYBELT_TEST_MODE", "").lower() in ("1", "true", "yes")


def set_test_mode(enabled: bool = True):
    """
    Enable/disable test mode globally.
    When enabled, file logging is never configured.

    Args:
        enabled: True to enable test mode, False to disable
    """
    global _test_mode
    _test_mode = enabled
    os.environ["UTILITYBELT_TEST_MODE"] = "1" if enabled else "0"


def is_test_mode() -> bool:
    """Check if test mode is enabled."""
    return _test_mode


class Settings(BaseSettings):
    """
    Toolkit settings loaded from environment variables or .env file.
    (Note: Environment variables take precedence over .env file)
    """
    PROJECT_NAME: str = "UtilityBelt"
    VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    ENABLE_FILE_LOGGING: bool = False
    LOG_DIR: str = str(PROJECT_ROOT / "logs")

    # Mirrors UTILITYBELT_TEST_MODE, see set_test_mode()
    TEST_MODE: bool = False

    # Significant digits of the decimal context used for scaling (10^n multiplications)
    DECIMAL_PRECISION: int = 100

    model_config = SettingsConfigDict(
        env_prefix="UTILITYBELT_",
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra="ignore"
        )


def get_settings() -> Settings:
    """
    Get settings instance.

    In test mode, file logging is always disabled.

    Returns:
        Settings: Toolkit settings
    """
    settings = Settings()

    if is_test_mode() or settings.TEST_MODE:
        settings.ENABLE_FILE_LOGGING = False

    return settings
