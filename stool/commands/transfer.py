"""File transfer command (scp upload and download)."""

import logging

from stool.commands.session import run_session
from stool.dependencies import Dependencies
from stool.models import Download, OutcomeKind, SessionOutcome, Upload
from stool.services import Cancelled, TransferMode

logger = logging.getLogger(__name__)


def transfer(deps: Dependencies, mode: TransferMode | None = None) -> SessionOutcome:
    """Copy a file between this machine and a selected server.

    Args:
        deps: Components for this run
        mode: Transfer direction; asked interactively when None

    Returns:
        Session outcome; USER_CANCELLED when the operator backed out
    """
    selector = deps.selector
    if mode is None:
        mode = selector.choose_transfer_mode()
        if mode is None:
            return SessionOutcome(OutcomeKind.USER_CANCELLED)

    selection = selector.choose(deps.catalog)
    if isinstance(selection, Cancelled):
        return SessionOutcome(OutcomeKind.USER_CANCELLED)

    if mode is TransferMode.UPLOAD:
        local = selector.ask_path("Local file path")
        remote = selector.ask_text(f"Remote path (default: {deps.config.upload_dir})")
        operation: Upload | Download = Upload(local_path=local, remote_path=remote)
    else:
        remote = selector.ask_text("Remote file path")
        local = selector.ask_path(f"Local path (default: {deps.config.download_dir})")
        operation = Download(remote_path=remote, local_path=local)

    outcome = run_session(deps, selection, operation)
    logger.info("Transfer completed (%s)", mode.value)
    return outcome
