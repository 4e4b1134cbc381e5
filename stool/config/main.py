"""Application configuration.

Delegates to specialized components:
- CatalogLoader: Reads the server catalog
- HostKeyVerifier: Looks up known_hosts
- Settings: Environment variables
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from stool.config.host_keys import HostKeyVerifier
from stool.config.loader import CatalogLoader
from stool.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration.

    Aggregates settings from the environment, the catalog source selected
    for this run and the host-key policy.
    """

    settings: Settings
    loader: CatalogLoader
    host_keys: HostKeyVerifier

    @classmethod
    def from_env(cls, config_path: Path | str | None = None) -> "Config":
        """Create config from environment.

        Args:
            config_path: External catalog file; overrides STOOL_CONFIG

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        source = config_path or settings.config_path
        if source:
            logger.debug("Using external catalog %s", source)

        return cls(
            settings=settings,
            loader=CatalogLoader(source),
            host_keys=HostKeyVerifier(
                known_hosts_path=settings.known_hosts,
                strict_checking=settings.strict_host_keys,
            ),
        )

    # Delegate to settings for convenience
    @property
    def download_dir(self) -> str:
        """Default local destination for downloads."""
        return self.settings.download_dir

    @property
    def upload_dir(self) -> str:
        """Default remote destination for uploads."""
        return self.settings.upload_dir

    @property
    def strict_host_keys(self) -> bool:
        """Whether password sessions refuse unknown host keys."""
        return self.host_keys.strict_checking
