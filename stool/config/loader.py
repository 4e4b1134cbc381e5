"""Catalog file loader.

Reads the YAML server catalog (embedded default or an external file) and
turns every entry into a Target. Any invalid entry fails the whole load.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from stool.errors import ConfigInvalid
from stool.models import Target
from stool.utils.validation import validate_address, validate_port, validate_user

logger = logging.getLogger(__name__)

EMBEDDED_SOURCE = "<embedded>"


class CatalogLoader:
    """Loader for stool catalog files.

    Reads the ``servers`` list of a YAML document and validates each entry.
    Other top-level keys (``ecr_registries``) are tolerated and ignored.
    """

    def __init__(self, config_path: Path | str | None = None):
        """Initialize catalog loader.

        Args:
            config_path: External YAML file (default: embedded default.yaml)
        """
        self.config_path = Path(config_path).expanduser() if config_path else None

    @property
    def source(self) -> str:
        """Human-readable name of the selected source."""
        return str(self.config_path) if self.config_path else EMBEDDED_SOURCE

    def load(self) -> list[Target]:
        """Parse the catalog source.

        Returns:
            Targets in file order

        Raises:
            ConfigInvalid: If the source is missing, unreadable or malformed
        """
        content = self._read()
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigInvalid(self.source, f"YAML parse error: {e}") from e

        if not isinstance(data, dict):
            raise ConfigInvalid(self.source, "top level must be a mapping")

        servers = data.get("servers")
        if servers is None:
            raise ConfigInvalid(self.source, "missing 'servers' list")
        if not isinstance(servers, list):
            raise ConfigInvalid(self.source, "'servers' must be a list")

        targets = [self._parse_entry(i, entry) for i, entry in enumerate(servers)]
        logger.info("Loaded %d targets from %s", len(targets), self.source)
        return targets

    def _read(self) -> str:
        if self.config_path is None:
            return resources.files("stool.config").joinpath("default.yaml").read_text()

        if not self.config_path.exists():
            raise ConfigInvalid(self.source, "file not found")
        try:
            logger.debug("Reading catalog from %s", self.config_path)
            return self.config_path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigInvalid(self.source, f"cannot read file: {e}") from e

    def _parse_entry(self, index: int, entry: Any) -> Target:
        """Build a Target from one ``servers`` item.

        Args:
            index: Position in the list, for error messages
            entry: Raw YAML value

        Returns:
            Validated Target

        Raises:
            ConfigInvalid: If the entry is not a valid server record
        """
        where = f"servers[{index}]"
        if not isinstance(entry, dict):
            raise ConfigInvalid(self.source, f"{where} must be a mapping")

        address = entry.get("address", entry.get("ip"))
        try:
            address = validate_address(self._text("address", address))
            user = validate_user(self._text("user", entry.get("user")))
            port = validate_port(entry.get("port", 22))
            key_path = self._optional_text(entry, "key_path")
            password = self._optional_text(entry, "password")
        except ValueError as e:
            raise ConfigInvalid(self.source, f"{where}: {e}") from e

        name = entry.get("name")

        if key_path and password:
            # Key file wins; see CredentialResolver
            logger.warning(
                "%s (%s@%s) sets both key_path and password; password ignored",
                where,
                user,
                address,
            )
            password = None

        return Target(
            address=address,
            user=user,
            name=str(name) if name is not None else None,
            port=port,
            key_path=key_path,
            password=password,
        )

    @staticmethod
    def _text(key: str, value: Any) -> str:
        if value is None:
            raise ValueError(f"missing '{key}'")
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ValueError(f"'{key}' must be text")
        return str(value)

    @staticmethod
    def _optional_text(entry: dict[str, Any], key: str) -> str | None:
        value = entry.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError(f"'{key}' must be text")
        return str(value)
