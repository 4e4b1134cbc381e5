"""Dependency injection container for stool.

Everything a command needs is built once per process and passed down
explicitly; there is no module-level configuration state.
"""

from dataclasses import dataclass
from pathlib import Path

from stool.config import Config
from stool.protocols import Spawn, default_spawn
from stool.services import (
    CredentialResolver,
    InteractiveSelector,
    SessionExecutor,
    SessionScriptBuilder,
    TargetCatalog,
)


@dataclass
class Dependencies:
    """Container for stool components.

    Example:
        deps = Dependencies.create(config_path="~/servers.yaml")
        connect(deps)
    """

    config: Config
    catalog: TargetCatalog
    selector: InteractiveSelector
    resolver: CredentialResolver
    builder: SessionScriptBuilder
    executor: SessionExecutor

    @classmethod
    def create(cls, config_path: Path | str | None = None) -> "Dependencies":
        """Create dependencies from the environment.

        Args:
            config_path: External catalog file (default: STOOL_CONFIG or
                the embedded catalog)

        Returns:
            Initialized Dependencies instance

        Raises:
            ConfigInvalid: If the catalog cannot be loaded
        """
        return cls.from_config(Config.from_env(config_path))

    @classmethod
    def from_config(
        cls,
        config: Config,
        selector: InteractiveSelector | None = None,
        spawn: Spawn = default_spawn,
    ) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Config instance
            selector: Prompt implementation (default: rich on stderr)
            spawn: Process factory for the executor

        Returns:
            Dependencies with the catalog loaded from config
        """
        selector = selector or InteractiveSelector()
        return cls(
            config=config,
            catalog=TargetCatalog.load(config.loader),
            selector=selector,
            resolver=CredentialResolver(selector),
            builder=SessionScriptBuilder(
                config.settings,
                strict_host_keys=config.strict_host_keys,
            ),
            executor=SessionExecutor(spawn=spawn),
        )
