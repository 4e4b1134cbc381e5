"""Credential resolution.

Turns a selected target into a ConnectionPlan. The authentication mode is
picked in a fixed order:

1. key file from the catalog (``-i``), checked on disk before anything runs
2. password stored in the catalog
3. password typed by the operator; empty input falls back to the default
   ssh behaviour (agent, ~/.ssh/config)
"""

import logging
from pathlib import Path

from stool.errors import CredentialResolutionFailed
from stool.models import (
    AuthMode,
    ConnectionPlan,
    Default,
    KeyFile,
    Operation,
    Password,
    Secret,
    Target,
)
from stool.protocols import Prompter
from stool.services.selector import Chosen, Manual

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Decides how to authenticate against a target."""

    def __init__(self, prompter: Prompter):
        """Initialize resolver.

        Args:
            prompter: Source of the interactive password
        """
        self.prompter = prompter

    def resolve(
        self,
        selection: Target | Chosen | Manual,
        operation: Operation,
    ) -> ConnectionPlan:
        """Resolve a target and operation into a plan.

        Args:
            selection: Catalog target, selector result or manual input
            operation: What the session will do

        Returns:
            Fully specified plan

        Raises:
            CredentialResolutionFailed: If the configured key file is missing
            OperatorCancelled: If the operator aborts the password prompt
        """
        target = _as_target(selection)
        auth = self._resolve_auth(target)
        plan = ConnectionPlan(
            address=target.address,
            user=target.user,
            port=target.port,
            auth=auth,
            operation=operation,
        )
        logger.info("Resolved %s with %s authentication", plan.display, plan.auth_name)
        return plan

    def _resolve_auth(self, target: Target) -> AuthMode:
        if target.key_path:
            key = Path(target.key_path).expanduser()
            if not key.exists():
                raise CredentialResolutionFailed(target.destination, key)
            return KeyFile(str(key))

        if target.password:
            return Password(Secret(target.password))

        entered = self.prompter.ask_secret(
            f"Password for {target.destination} (empty for default SSH auth)"
        )
        if entered:
            return Password(Secret(entered))
        return Default()


def _as_target(selection: Target | Chosen | Manual) -> Target:
    if isinstance(selection, Target):
        return selection
    if isinstance(selection, Chosen):
        return selection.target
    if isinstance(selection, Manual):
        return Target(address=selection.address, user=selection.user)
    raise TypeError(f"Cannot resolve {type(selection).__name__}")
