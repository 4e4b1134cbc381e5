"""Configuration module for stool.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (aggregates all components)
- CatalogLoader: Parses the YAML server catalog
- HostKeyVerifier: known_hosts lookup and host-key policy
- Settings: Environment variable configuration
"""

from stool.config.host_keys import HostKeyVerifier
from stool.config.loader import CatalogLoader
from stool.config.main import Config
from stool.config.settings import Settings

__all__ = ["CatalogLoader", "Config", "HostKeyVerifier", "Settings"]
