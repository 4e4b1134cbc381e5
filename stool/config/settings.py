"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Catalog source
    config_path: str | None = field(default=None)

    # Transfer defaults
    download_dir: str = field(default="~/Downloads")
    upload_dir: str = field(default="~/")

    # External programs
    ssh_bin: str = field(default="ssh")
    scp_bin: str = field(default="scp")
    expect_bin: str = field(default="expect")
    prompt_timeout: int = field(default=30)

    # Host keys
    known_hosts: str | None = field(default=None)
    strict_host_keys: bool = field(default=False)

    # Logging
    log_level: str = field(default="WARNING")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from STOOL_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            config_path=os.getenv("STOOL_CONFIG") or None,
            download_dir=os.getenv("STOOL_DOWNLOAD_DIR", "~/Downloads"),
            upload_dir=os.getenv("STOOL_UPLOAD_DIR", "~/"),
            ssh_bin=os.getenv("STOOL_SSH_BIN", "ssh"),
            scp_bin=os.getenv("STOOL_SCP_BIN", "scp"),
            expect_bin=os.getenv("STOOL_EXPECT_BIN", "expect"),
            prompt_timeout=cls._get_int("STOOL_PROMPT_TIMEOUT", 30),
            known_hosts=os.getenv("STOOL_KNOWN_HOSTS") or None,
            strict_host_keys=cls._get_bool("STOOL_STRICT_HOST_KEYS", False),
            log_level=os.getenv("STOOL_LOG_LEVEL", "WARNING").upper(),
            log_colors=cls._get_bool("STOOL_LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get a positive integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default
        if parsed <= 0:
            logger.warning("Non-positive %s: %s, using default %d", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
