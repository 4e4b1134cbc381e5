"""Target catalog."""

import logging
from collections.abc import Iterator

from stool.config.loader import CatalogLoader
from stool.models import Target

logger = logging.getLogger(__name__)


class TargetCatalog:
    """Read-only, ordered list of known targets for one run."""

    def __init__(self, targets: list[Target] | tuple[Target, ...] = ()):
        self._targets = tuple(targets)

    @classmethod
    def load(cls, loader: CatalogLoader) -> "TargetCatalog":
        """Build the catalog from a loader.

        Raises:
            ConfigInvalid: If the source cannot be parsed; no partial
                catalog is returned.
        """
        return cls(loader.load())

    def list(self) -> tuple[Target, ...]:
        """Targets in configuration order."""
        return self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)
