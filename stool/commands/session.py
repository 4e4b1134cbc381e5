"""Shared session flow: resolve, build, run."""

import contextlib
import logging

from stool.dependencies import Dependencies
from stool.errors import SessionFailed
from stool.models import ConnectionPlan, Operation, Password, SessionOutcome, Target
from stool.services import Chosen, Manual

logger = logging.getLogger(__name__)


def run_session(
    deps: Dependencies,
    selection: Target | Chosen | Manual,
    operation: Operation,
) -> SessionOutcome:
    """Resolve credentials for a selection and run one session.

    Credential and configuration problems are raised before any process is
    spawned. The password secret is cleared on every exit path.

    Args:
        deps: Components for this run
        selection: Target to connect to
        operation: What to do there

    Returns:
        Successful or cancelled outcome

    Raises:
        CredentialResolutionFailed: If the configured key file is missing
        ToolMissing: If ssh, scp or expect is not installed
        InvalidInput: If transfer paths are unusable
        SessionFailed: If the session ended in failure
    """
    plan = deps.resolver.resolve(selection, operation)
    logger.debug("Running %s session for %s", type(operation).__name__.lower(), plan.display)
    with _secret_scope(plan):
        if isinstance(plan.auth, Password):
            deps.config.host_keys.check_before_auto_accept(plan.address, plan.port)
        with deps.builder.build(plan) as invocation:
            outcome = deps.executor.run(invocation)

    if not outcome.ok:
        raise SessionFailed(plan.display, outcome)
    return outcome


def _secret_scope(plan: ConnectionPlan) -> contextlib.AbstractContextManager[object]:
    if isinstance(plan.auth, Password):
        return plan.auth.secret
    return contextlib.nullcontext()
