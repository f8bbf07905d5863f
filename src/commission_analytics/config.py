"""Environment-based configuration for the commission analytics engine."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class Settings:
    """Configuration loaded from environment variables."""

    def __init__(self):
        self.data_dir = Path(os.getenv(
            "COMMISSION_DATA_DIR",
            str(Path.home() / ".commission-analytics"),
        ))
        # Callers holding this role see every agent's commissions
        self.elevated_role = os.getenv("COMMISSION_ELEVATED_ROLE", "admin")
        self.host = os.getenv("COMMISSION_API_HOST", "127.0.0.1")
        self.port = int(os.getenv("COMMISSION_API_PORT", "8000"))
        self.log_level = os.getenv("COMMISSION_LOG_LEVEL", "INFO").upper()


_settings = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.debug(f"Loaded settings (data_dir={_settings.data_dir})")
    return _settings


class _SettingsProxy:
    """Lazy proxy so settings aren't loaded until first access."""

    def __getattr__(self, name):
        return getattr(_get_settings(), name)


settings = _SettingsProxy()
