"""Interactive remote shell command."""

import logging

from stool.commands.session import run_session
from stool.dependencies import Dependencies
from stool.models import OutcomeKind, SessionOutcome, Shell
from stool.services import Cancelled

logger = logging.getLogger(__name__)


def connect(deps: Dependencies) -> SessionOutcome:
    """Select a server and open a shell on it.

    Returns:
        Session outcome; USER_CANCELLED when the operator backed out
    """
    selection = deps.selector.choose(deps.catalog)
    if isinstance(selection, Cancelled):
        return SessionOutcome(OutcomeKind.USER_CANCELLED)
    return run_session(deps, selection, Shell())
